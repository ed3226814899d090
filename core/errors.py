"""Exception hierarchy for RetinaScan."""

from core.utils import MAX_UPLOAD_BYTES, format_file_size


class RetinaScanError(Exception):
    """Base class for all RetinaScan errors. The message is user-facing."""

    default_message = "Something went wrong."

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# --- Intake ---

class ValidationError(RetinaScanError):
    """A selected file was rejected before it reached the workflow."""


class FileNotFound(ValidationError):
    default_message = "The selected file could not be found."


class EmptyFile(ValidationError):
    default_message = "The selected file is empty."


class UnsupportedMediaType(ValidationError):
    default_message = "Please upload a JPEG or PNG image file."


class FileTooLarge(ValidationError):
    default_message = f"The image exceeds the {format_file_size(MAX_UPLOAD_BYTES)} upload limit."


class UnreadableImage(ValidationError):
    default_message = "The selected file could not be read as an image."


# --- Workflow ---

class PreconditionFailed(RetinaScanError):
    """An action was attempted before the workflow could accept it."""


class NoImageSelected(PreconditionFailed):
    default_message = "Please upload an image first."
