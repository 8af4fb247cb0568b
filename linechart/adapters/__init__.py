from .normalize import detect_shape, normalize_samples, normalize_xy

__all__ = ["detect_shape", "normalize_samples", "normalize_xy"]
