# config/rewards_config.py

from datetime import timedelta
from enum import Enum
from typing import Optional


class WasteCategory(str, Enum):
    plastic    = "plastic"
    paper      = "paper"
    metal      = "metal"
    glass      = "glass"
    organic    = "organic"
    electronic = "electronic"
    hazardous  = "hazardous"


class UserRole(str, Enum):
    customer = "customer"
    agent    = "agent"


class RewardReason(str, Enum):
    """Ledger reasons; the value is the text stored in reward history."""
    classification   = "Classified {label}"
    pickup_completed = "Pickup {pickup_id} completed"
    five_star_rating = "5-star rating for pickup {pickup_id}"
    manual           = "Recycling activity"

    def describe(self, **details) -> str:
        return self.value.format(**details)


# Customer base points per item
CUSTOMER_POINTS = {
    WasteCategory.plastic:     10,
    WasteCategory.paper:        8,
    WasteCategory.metal:       15,
    WasteCategory.glass:       12,
    WasteCategory.organic:      5,
    WasteCategory.electronic:  25,
    WasteCategory.hazardous:   20,
}

# kg of CO2 saved per kg of recycled material
CO2_PER_KG = {
    WasteCategory.plastic:    2.0,
    WasteCategory.paper:      1.5,
    WasteCategory.metal:      3.5,
    WasteCategory.glass:      0.5,
    WasteCategory.organic:    0.3,
    WasteCategory.electronic: 4.0,
    WasteCategory.hazardous:  2.5,
}

# Unmapped categories fall back to these
DEFAULT_CUSTOMER_POINTS = 10
DEFAULT_CO2_PER_KG = 1.0

# Agent rewards
AGENT_BASE_PICKUP = 50
AGENT_SPEED_BONUS = 10          # completed within SPEED_BONUS_WINDOW of acceptance
AGENT_RATING_BONUS = 20         # 5-star rating from customer
AGENT_PERFORMANCE_MULTIPLIER = 1.10
AGENT_PERFORMANCE_THRESHOLD = 50
SPEED_BONUS_WINDOW = timedelta(hours=1)
TOP_RATING = 5

# Customer multipliers, applied in this order
FIRST_TIME_BONUS = 2.0
BULK_BONUS = 1.5
STREAK_BONUS = 1.2
BULK_THRESHOLD = 10
STREAK_THRESHOLD = 7

# (name, minimum total items), highest first
BADGE_LEVELS = [
    ("Eco Legend",              250),
    ("Planet Hero",             100),
    ("Sustainability Champion",  50),
    ("Green Warrior",            10),
    ("Eco Starter",               0),
]

# (level, minimum completed pickups), highest first
PERFORMANCE_LEVELS = [
    ("Elite",        100),
    ("Expert",        50),
    ("Professional",  20),
    ("Intermediate",   5),
    ("Beginner",       0),
]


def resolve_category(value) -> Optional[WasteCategory]:
    """
    Map a raw category string onto a known category, None when unknown.
    Matching is exact: "Plastic" is not "plastic" and takes the default path.
    """
    if isinstance(value, WasteCategory):
        return value
    try:
        return WasteCategory(value)
    except ValueError:
        return None
