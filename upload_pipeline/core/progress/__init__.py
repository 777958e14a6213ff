from .upload_progress import ProgressCallback, ProgressStream, UploadPhase, UploadProgress

__all__ = ["ProgressCallback", "ProgressStream", "UploadPhase", "UploadProgress"]
