"""Test data factories for caption delivery testing.

Provides deterministic test data builders for:
- Content documents (per locale)
- Fake HTTP responses and sessions for the content origin
- Fully wired in-memory LocaleStore instances
"""

import copy
from typing import Optional
from unittest.mock import Mock

import requests

from infrastructure.i18n import (
    ContentLoader,
    LocaleStore,
    MemoryContentCache,
    MemoryPreferenceStore,
)

SPANISH_DOCUMENT = {
    "common": {"save": "Guardar", "current": "Actual"},
    "error": {"generic": "Algo salió mal."},
    "footer": {"privacy": "Privacidad"},
    "dashboard": {"welcome": "Bienvenido de nuevo, {name}!"},
    "settings": {"title": "Configuración"},
}

FRENCH_DOCUMENT = {
    "common": {"save": "Enregistrer", "cancel": "Annuler"},
    "error": {"generic": "Une erreur est survenue."},
    "footer": {"privacy": "Confidentialité"},
    "dashboard": {"welcome": "Bon retour, {name} !"},
    "settings": {"title": "Paramètres"},
}

DEFAULT_DOCUMENT = {
    "common": {"save": "Save", "cancel": "Cancel"},
    "error": {"generic": "Something went wrong."},
    "footer": {"privacy": "Privacy"},
    "dashboard": {"welcome": "Welcome back, {name}!"},
    "settings": {"title": "Settings"},
}


def make_document(locale: str = "es") -> dict:
    """Return a fresh copy of the sample document for ``locale``."""
    documents = {"es": SPANISH_DOCUMENT, "fr": FRENCH_DOCUMENT, "en": DEFAULT_DOCUMENT}
    return copy.deepcopy(documents[locale])


def make_response(status_code: int = 200, payload=None, text: str = "") -> Mock:
    """Create a fake requests.Response.

    Args:
        status_code: HTTP status code.
        payload: Value returned by ``json()``. An Exception instance is raised.
        text: Response body text.
    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def make_session(documents: Optional[dict] = None, status_code: int = 200) -> Mock:
    """Create a fake requests.Session serving one document per locale.

    URLs look like ``{base}/{locale}/en.json``; unknown locales get a 404.
    ``session.get.call_count`` counts network calls.
    """
    documents = documents if documents is not None else {
        "es": make_document("es"),
        "fr": make_document("fr"),
    }
    session = Mock(spec=requests.Session)
    session.headers = {}

    def _get(url, timeout=None):
        locale = url.rstrip("/").split("/")[-2]
        if status_code != 200:
            return make_response(status_code, text="server error")
        if locale not in documents:
            return make_response(404, text="not found")
        return make_response(200, copy.deepcopy(documents[locale]))

    session.get.side_effect = _get
    return session


def make_store(
    session: Optional[Mock] = None,
    cache=None,
    preferences=None,
    device_locale_probe=None,
    supported_locales=("en", "es", "fr"),
    baseline_sections=("common", "error", "footer"),
) -> LocaleStore:
    """Create a LocaleStore backed by in-memory storage and a fake session."""
    cache = cache if cache is not None else MemoryContentCache()
    preferences = preferences if preferences is not None else MemoryPreferenceStore()
    loader = ContentLoader(
        base_url="https://cdn.example.com/content",
        cache=cache,
        default_locale=supported_locales[0],
        session=session if session is not None else make_session(),
    )
    return LocaleStore(
        loader=loader,
        cache=cache,
        preferences=preferences,
        supported_locales=supported_locales,
        baseline_sections=baseline_sections,
        device_locale_probe=device_locale_probe,
    )
