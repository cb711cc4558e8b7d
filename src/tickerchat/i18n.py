"""Display string lookup.

The session assembles user-facing text only through a Localizer and treats
the result as opaque. CatalogLocalizer ships English and Italian catalogs;
hosts with their own translation service implement Localizer directly.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        "chat.greeting": (
            "Hello! I'm your AI trading assistant. I use advanced language models "
            "combined with LSTM, XGBoost, and LightGBM for market analysis. "
            "Ask me anything about {subject} or other assets!"
        ),
        "chat.fallback": (
            "Sorry, an error occurred while communicating with the assistant. "
            "Please try again or check the API key configuration."
        ),
        "chat.fallback.authentication": (
            "The AI service rejected the API key. Please check the key in your settings."
        ),
        "chat.fallback.quota": (
            "The AI provider account has insufficient credit. Please add funds to the account."
        ),
        "chat.fallback.rate_limit": (
            "Too many requests right now. Please wait a moment and try again."
        ),
        "chat.fallback.network": (
            "The AI service could not be reached. Please check your connection and try again."
        ),
        "chat.fallback.timeout": (
            "The AI service took too long to answer. Please try again."
        ),
        "chat.no_response": "No response received from the AI.",
        "notify.success": "Response received from the AI",
        "notify.failure": "Error communicating with the AI chatbot",
        "status.unconfigured": "API key not configured",
        "status.offline": "Chatbot is currently offline.",
        "status.busy": "AI Assistant is thinking...",
        "status.ready": "Chatbot is live and powered by {provider}.",
        "label.user": "You",
        "label.bot": "AI Assistant",
        "input.placeholder": "Type your message...",
    },
    "it": {
        "chat.greeting": (
            "Ciao! Sono il tuo assistente di trading AI. Uso modelli linguistici avanzati "
            "combinati con LSTM, XGBoost e LightGBM per l'analisi di mercato. "
            "Chiedimi qualsiasi cosa su {subject} o su altri asset!"
        ),
        "chat.fallback": (
            "Mi dispiace, si è verificato un errore nella comunicazione. "
            "Per favore riprova o verifica la configurazione dell'API key."
        ),
        "chat.fallback.authentication": (
            "Errore di autenticazione. Verifica la tua chiave API nelle impostazioni."
        ),
        "chat.fallback.quota": (
            "Credito insufficiente. Aggiungi fondi al tuo account."
        ),
        "chat.fallback.rate_limit": (
            "Troppe richieste. Rate limit superato. Riprova più tardi."
        ),
        "chat.fallback.network": (
            "Errore di connessione. Verifica la connessione e riprova."
        ),
        "chat.fallback.timeout": (
            "Il servizio AI non ha risposto in tempo. Riprova."
        ),
        "chat.no_response": "Nessuna risposta ricevuta",
        "notify.success": "Risposta ricevuta dall'AI",
        "notify.failure": "Errore comunicazione con AI Chatbot",
        "status.unconfigured": "API key non configurata",
        "status.offline": "Il chatbot è attualmente offline.",
        "status.busy": "L'assistente AI sta pensando...",
        "status.ready": "Il chatbot è attivo con {provider}.",
        "label.user": "Tu",
        "label.bot": "Assistente AI",
        "input.placeholder": "Scrivi il tuo messaggio...",
    },
}


class Localizer(ABC):
    """Supplies display strings by key."""

    @abstractmethod
    def translate(self, key: str, **params: Any) -> str:
        """Return the display string for key with params interpolated."""


class _KeepMissing(dict):
    """format_map helper that leaves unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class CatalogLocalizer(Localizer):
    """Dictionary-backed localizer.

    Lookup order is the active language, then the default language, then
    the key itself so that a missing translation never raises.
    """

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        catalogs: dict[str, dict[str, str]] | None = None,
    ):
        self._catalogs = catalogs if catalogs is not None else CATALOGS
        self.language = language

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, value: str) -> None:
        code = value.split("-")[0].lower()
        if code not in self._catalogs:
            logger.warning("No catalog for language %r, using %r", value, DEFAULT_LANGUAGE)
            code = DEFAULT_LANGUAGE
        self._language = code

    @property
    def languages(self) -> list[str]:
        return sorted(self._catalogs)

    def translate(self, key: str, **params: Any) -> str:
        template = self._catalogs.get(self._language, {}).get(key)
        if template is None:
            template = self._catalogs.get(DEFAULT_LANGUAGE, {}).get(key, key)
        return template.format_map(_KeepMissing(params))
