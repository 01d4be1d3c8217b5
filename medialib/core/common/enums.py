# File: medialib/core/common/enums.py

from enum import Enum, unique

@unique
class EntryType(str, Enum):
    ATTACHMENT = "attachment"
    PAGE = "page"
    POST = "post"

@unique
class EntryStatus(str, Enum):
    # Attachments "inherit" visibility from whatever they are attached to
    INHERIT = "inherit"
    PUBLISH = "publish"
    DRAFT = "draft"

@unique
class ScanMode(str, Enum):
    NARROW = "narrow"
    DEEP = "deep"
