from typing import Annotated, Any

from fastapi import Depends, Request

from fastapi_locales.core.exceptions import ConfigurationError
from fastapi_locales.i18n.context import LOCALE_CONTEXT_KEY
from fastapi_locales.i18n.request import LocaleContext
from fastapi_locales.i18n.translator import Locales, Translator


def get_locales(request: Request) -> Locales:
    locales = getattr(request.app.state, "locales", None)
    if locales is None:
        raise ConfigurationError("Locales are not installed on this application")
    return locales


def get_locale_context(request: Request) -> LocaleContext:
    ctx = getattr(request.state, LOCALE_CONTEXT_KEY, None)
    if ctx is None:
        raise ConfigurationError("LocaleMiddleware is not installed")
    return ctx


LocalesDep = Annotated[Locales, Depends(get_locales)]
LocaleContextDep = Annotated[LocaleContext, Depends(get_locale_context)]


def get_translator(locales: LocalesDep, ctx: LocaleContextDep) -> Translator:
    return locales.bind(ctx)


def get_request_locale(locales: LocalesDep, ctx: LocaleContextDep) -> str:
    return locales.get_locale(ctx)


TranslatorDep = Annotated[Translator, Depends(get_translator)]
LocaleDep = Annotated[str, Depends(get_request_locale)]


def locale_context_processor(request: Request) -> dict[str, Any]:
    """Jinja2Templates context processor exposing the translator.

    Templates get the translator under FUNCTION_NAME and the resolved
    locale as ``locale``:

        templates = Jinja2Templates(
            directory="templates",
            context_processors=[locale_context_processor],
        )

        <h1>{{ __("home.title") }}</h1>
    """
    locales = get_locales(request)
    translator = locales.bind(get_locale_context(request))
    return {
        locales.function_name: translator,
        "locale": translator.locale,
    }
