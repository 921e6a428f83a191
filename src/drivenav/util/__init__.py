from .files import ACCEPTED_UPLOAD_EXTENSIONS, accepted_formats_label, is_accepted_upload
from .format import ICON_BY_EXTENSION, SIZE_UNITS, UNKNOWN_ICON, human_date, human_size, icon_for
from .mime import DEFAULT_UPLOAD_MIME, FOLDER_MIME, guess_upload_mime, is_folder
from .time import parse_rfc3339

__all__ = [
    "ACCEPTED_UPLOAD_EXTENSIONS",
    "accepted_formats_label",
    "is_accepted_upload",
    "ICON_BY_EXTENSION",
    "SIZE_UNITS",
    "UNKNOWN_ICON",
    "icon_for",
    "human_size",
    "human_date",
    "DEFAULT_UPLOAD_MIME",
    "FOLDER_MIME",
    "guess_upload_mime",
    "is_folder",
    "parse_rfc3339",
]
