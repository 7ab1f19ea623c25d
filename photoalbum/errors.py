from fastapi import status


class PhotoAlbumError(Exception):
    """Base class for errors surfaced to the request boundary."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(PhotoAlbumError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(PhotoAlbumError):
    status_code = status.HTTP_409_CONFLICT


class ValidationError(PhotoAlbumError):
    status_code = status.HTTP_400_BAD_REQUEST


class StoreUnavailable(PhotoAlbumError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class UploadFailure(PhotoAlbumError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
