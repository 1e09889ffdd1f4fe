from pathplan.crud import goal, step

__all__ = ["goal", "step"]
