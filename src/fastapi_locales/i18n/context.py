"""Request-scoped locale state.

Each request owns one RequestLocaleState, held by its locale context
(see request.py) and stored in the ASGI scope state. A contextvar
points at the bound translator for the request being handled so that
module-level helpers can be called from anywhere inside it.
"""

from collections.abc import Mapping, MutableMapping
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fastapi_locales.i18n.translator import Translator

# Key used in request.scope["state"] for the request's locale context
LOCALE_CONTEXT_KEY = "_locale_context"

_current_translator: ContextVar["Translator | None"] = ContextVar(
    "locale_translator", default=None
)


@dataclass
class RequestLocaleState:
    """Resolved locale and attached resource mapping for one request.

    The locale is written at most once; later writes are ignored so the
    first resolution stays authoritative for the rest of the request.
    """

    locale: str | None = None
    resource: Mapping[str, str] | None = None

    @property
    def is_resolved(self) -> bool:
        return self.locale is not None

    def remember(self, locale: str) -> str:
        """Memoize the resolved locale and return the memoized value."""
        if self.locale is None:
            self.locale = locale
        return self.locale

    def attach_resource_mapping(self, mapping: Mapping[str, str] | None) -> None:
        self.resource = mapping


def get_current_translator() -> "Translator | None":
    """Return the translator bound to the request being handled, if any."""
    return _current_translator.get()


def set_current_translator(translator: "Translator | None") -> Token["Translator | None"]:
    return _current_translator.set(translator)


def reset_current_translator(token: Token["Translator | None"]) -> None:
    _current_translator.reset(token)


def add_request_locale(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor adding the current request's locale.

    Only a locale that is already resolved is added; logging never
    triggers resolution (and with it a cookie write).
    """
    translator = _current_translator.get()
    if translator is not None and "locale" not in event_dict:
        locale = translator.ctx.locale_state.locale
        if locale is not None:
            event_dict["locale"] = locale
    return event_dict
