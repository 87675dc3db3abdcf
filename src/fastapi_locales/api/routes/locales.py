from typing import Annotated

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel

from fastapi_locales.core.exceptions import LocaleNotFoundError
from fastapi_locales.i18n import LocaleDep, LocalesDep, TranslatorDep

router = APIRouter(tags=["locales"])


class LocalePublic(BaseModel):
    locale: str
    available: list[str]


class MessagePublic(BaseModel):
    key: str
    locale: str
    text: str


@router.get("/locale", response_model=LocalePublic)
def read_locale(locale: LocaleDep, locales: LocalesDep) -> LocalePublic:
    """Get the locale resolved for this request and the loaded locales."""
    return LocalePublic(locale=locale, available=locales.loader.locales)


@router.get("/locales/{locale}/messages", response_model=dict[str, str])
def read_locale_messages(
    locales: LocalesDep,
    locale: Annotated[str, Path(min_length=1)],
) -> dict[str, str]:
    """Get every message of a loaded locale bundle."""
    if not locales.loader.has_locale(locale):
        raise LocaleNotFoundError(locale)
    return dict(locales.loader.get(locale))


@router.get("/messages/{key}", response_model=MessagePublic)
def render_message(
    key: str,
    translator: TranslatorDep,
    arg: Annotated[list[str] | None, Query()] = None,
) -> MessagePublic:
    """Render a message in the request locale.

    Each ``arg`` query parameter is passed as one positional argument.
    """
    args = arg or []
    return MessagePublic(
        key=key,
        locale=translator.locale,
        text=translator(key, *args),
    )
