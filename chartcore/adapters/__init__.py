from chartcore.adapters.normalize import normalize_intervals, normalize_points

__all__ = ["normalize_intervals", "normalize_points"]
