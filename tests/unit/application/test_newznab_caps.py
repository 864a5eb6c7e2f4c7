"""Tests for NewznabCapsUseCase."""

from __future__ import annotations

from orionzb.application.use_cases.newznab_caps import (
    MOVIE_SEARCH_PARAMS,
    TV_SEARCH_PARAMS,
    NewznabCapsUseCase,
)
from orionzb.infrastructure.newznab.categories import CATEGORY_TREE


def _caps(**overrides):
    kwargs = {
        "server_name": "Orion",
        "server_description": "Orionoid bridge",
        "base_url": "http://indexer.local:3000",
        "max_results": 100,
        "default_results": 50,
    }
    kwargs.update(overrides)
    return NewznabCapsUseCase(**kwargs).execute()


def test_server_metadata() -> None:
    caps = _caps()
    assert caps.server_title == "Orion"
    assert caps.server_strapline == "Orionoid bridge"
    assert caps.server_url == "http://indexer.local:3000"
    assert caps.server_version == "1.0"


def test_limits_follow_configuration() -> None:
    caps = _caps(max_results=250, default_results=25)
    assert caps.limits_max == 250
    assert caps.limits_default == 25


def test_registration_closed() -> None:
    caps = _caps()
    assert caps.registration_available is False
    assert caps.registration_open is False


def test_all_search_modes_available() -> None:
    caps = _caps()
    assert caps.search.available
    assert caps.tv_search.supported_params == TV_SEARCH_PARAMS
    assert caps.movie_search.supported_params == MOVIE_SEARCH_PARAMS


def test_category_tree() -> None:
    caps = _caps()
    assert caps.categories is CATEGORY_TREE
    movies = caps.categories[0]
    assert [c.id for c in movies.subcategories] == [
        "2010", "2020", "2030", "2040", "2045", "2050", "2060",
    ]
