import enum


class Cadence(str, enum.Enum):
    """Step bucket"""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value) -> "Cadence":
        """Accept a Cadence or its name/value in any case"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"unknown cadence {value!r}, expected one of {[c.value for c in cls]}"
            ) from None
