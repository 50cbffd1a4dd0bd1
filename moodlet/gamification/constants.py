"""Game-rule constants shared by the gamification modules"""

# Points per check-in component
POINTS_MOOD_LOG = 1
POINTS_CONTEXT_TAGS = 1
POINTS_REFLECTION = 2

# Flat bonus for completing a weekly review
POINTS_WEEKLY_REVIEW = 3

# Change in average mood vs. the previous week that counts as a trend
MOOD_TREND_THRESHOLD = 0.3

# Point-earning check-ins allowed per calendar day
MAX_DAILY_POINT_ENTRIES = 3

# A gap of this many days forgives exactly one missed day, once per streak
GRACE_PERIOD_DAYS = 2

# Streak milestone (days) -> bonus points, ascending
STREAK_MILESTONE_BONUSES = {
    3: 2,
    7: 5,
    14: 10,
    30: 15,
    100: 25,
}

STREAK_MILESTONES = tuple(STREAK_MILESTONE_BONUSES)
