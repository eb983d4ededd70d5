"""Type hints used in Pentathlon Scoring."""

from typing import List, Literal, Tuple

# Gender string constants (for runtime use)
MALE = "M"
FEMALE = "F"

Gender = Literal["M", "F"]

AgeCategory = Literal[
    "U9",
    "U11",
    "U13",
    "U15",
    "U17",
    "U19",
    "Junior",
    "Senior",
    "Masters",
]

Discipline = Literal[
    "fencing_ranking",
    "fencing_de",
    "obstacle",
    "swimming",
    "laser_run",
    "riding",
]

# Laser run start gates, "P" is the pack start
Gate = Literal["A", "B", "P"]

StartMode = Literal["staggered", "mass"]

# 1-indexed competitor slots in a ranking pool
BoutPair = Tuple[int, int]
# Every bout of a pool, in fencing order
BoutOrder = List[BoutPair]

#  LocalWords:  BoutPair BoutOrder
