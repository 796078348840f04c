"""Utility constants for elapsed.

Time unit constants represent durations in seconds. Months and years are
approximations: a month is four weeks and a year is twelve such months for
the breakdown, while whole years are counted from 52-week blocks.
"""

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800

# Approximation factors used by the decomposition
DAYS_PER_WEEK = 7
WEEKS_PER_MONTH = 4
MONTHS_PER_YEAR = 12
WEEKS_PER_YEAR = 52

# Rendered when target and reference coincide
NOW_PHRASE = "now"
