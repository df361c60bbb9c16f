"""
Configuration settings for the pool engine

Loads environment variables and provides engine configuration.
"""
import os
from dotenv import load_dotenv

from .constants import TICK_SPACINGS

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Engine settings"""

    # Pool Configuration
    FEE_TIER: int = int(os.getenv("CLAMM_FEE_TIER", 3000))
    TICK_SPACING: int = int(os.getenv("CLAMM_TICK_SPACING", 0))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("CLAMM_LOG_LEVEL", "INFO").upper()
    LOG_EVENTS: bool = os.getenv("CLAMM_LOG_EVENTS", "True").lower() == "true"

    def get_tick_spacing(self) -> int:
        """Tick spacing from env, or the standard spacing for the fee tier"""
        if self.TICK_SPACING > 0:
            return self.TICK_SPACING
        if self.FEE_TIER not in TICK_SPACINGS:
            raise ValueError(
                f"CLAMM_TICK_SPACING must be set for non-standard fee tier {self.FEE_TIER}"
            )
        return TICK_SPACINGS[self.FEE_TIER]


# Create global settings instance
settings = Settings()
