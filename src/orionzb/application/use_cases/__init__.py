from .newznab_caps import NewznabCapsUseCase
from .newznab_details import NewznabDetailsUseCase
from .newznab_download import DownloadResult, NewznabDownloadUseCase
from .newznab_search import NewznabSearchUseCase, TypeSearchOutcome

__all__ = [
    "DownloadResult",
    "NewznabCapsUseCase",
    "NewznabDetailsUseCase",
    "NewznabDownloadUseCase",
    "NewznabSearchUseCase",
    "TypeSearchOutcome",
]
