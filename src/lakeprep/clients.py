from __future__ import annotations

from functools import lru_cache
from typing import Any

import google.auth
from google.cloud import dataplex_v1
from google.cloud import storage  # type: ignore # noqa: I001

from .core import CLOUD_PLATFORM_SCOPE

# Shared Client Registry (Lazy-loaded and cached)


@lru_cache(maxsize=1)
def get_credentials() -> tuple[Any, str | None]:
    """Application-default credentials and the project they carry, if any."""
    return google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])  # type: ignore[no-any-return]


@lru_cache(maxsize=1)
def get_dataplex_client() -> Any:
    return dataplex_v1.DataplexServiceClient()


@lru_cache(maxsize=1)
def get_catalog_client() -> Any:
    return dataplex_v1.CatalogServiceClient()


@lru_cache(maxsize=1)
def get_serviceusage_client() -> Any:
    from googleapiclient import discovery

    return discovery.build("serviceusage", "v1", cache_discovery=False)


@lru_cache(maxsize=1)
def get_storage_client() -> Any:
    return storage.Client()
