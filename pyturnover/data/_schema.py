"""
Column layout of the employee turnover table.
"""

DURATION = "duration"
EVENT = "event"

CATEGORICAL = (
    "gender",
    "industry",
    "profession",
    "traffic",
    "coach",
    "head_gender",
    "greywage",
    "transport",
)

NUMERIC = (
    "age",
    "extraversion",
    "independ",
    "selfcontrol",
    "anxiety",
    "novator",
)

COVARIATES = (
    "gender", "age", "industry", "profession", "traffic", "coach",
    "head_gender", "greywage", "transport", "extraversion", "independ",
    "selfcontrol", "anxiety", "novator",
)

# header names used by the published turnover.csv
RAW_RENAMES = {"stag": DURATION, "way": "transport"}
