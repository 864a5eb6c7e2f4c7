from __future__ import annotations

from orionzb.domain.entities import NewznabCaps, NewznabSearchMode
from orionzb.infrastructure.newznab.categories import CATEGORY_TREE

SEARCH_PARAMS = "q,cat,limit,offset,maxage"
TV_SEARCH_PARAMS = "q,cat,limit,offset,maxage,season,ep,imdbid,tvdbid,tmdbid,traktid,rid"
MOVIE_SEARCH_PARAMS = "q,cat,limit,offset,maxage,imdbid,tmdbid,traktid"


class NewznabCapsUseCase:
    def __init__(
        self,
        *,
        server_name: str,
        server_description: str,
        base_url: str,
        max_results: int,
        default_results: int,
        server_version: str = "1.0",
    ) -> None:
        self._server_name = server_name
        self._server_description = server_description
        self._base_url = base_url
        self._max_results = max_results
        self._default_results = default_results
        self._server_version = server_version

    def execute(self) -> NewznabCaps:
        return NewznabCaps(
            server_title=self._server_name,
            server_strapline=self._server_description,
            server_url=self._base_url,
            server_version=self._server_version,
            limits_max=self._max_results,
            limits_default=self._default_results,
            search=NewznabSearchMode(available=True, supported_params=SEARCH_PARAMS),
            tv_search=NewznabSearchMode(available=True, supported_params=TV_SEARCH_PARAMS),
            movie_search=NewznabSearchMode(
                available=True, supported_params=MOVIE_SEARCH_PARAMS
            ),
            categories=CATEGORY_TREE,
        )
