from .grouping import SortedGroups, group_sorted

__all__ = ["SortedGroups", "group_sorted"]
