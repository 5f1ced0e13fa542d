"""Localized query building for language-suffixed document fields.

Documents keep one field per language (``title-en``, ``title-ru``). A
``LocalizedQuery`` selects the documents that have the field for the requested
language, projects only what the response needs, and renames the suffixed
fields to stable keys so clients never see the suffix.
"""

from dataclasses import dataclass, field

from src.core.constants import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from src.core.types import Document, Projection, QueryFilter


def resolve_language(code: str | None) -> str:
    """Resolve a requested language code to a supported one.

    Args:
        code: Language code from the query string, possibly missing.

    Returns:
        str: The normalized code, or the default language when the code is
            missing or unsupported.
    """
    if code is None:
        return DEFAULT_LANGUAGE
    normalized = code.strip().lower()
    if normalized in SUPPORTED_LANGUAGES:
        return normalized
    return DEFAULT_LANGUAGE


def localized_field(base: str, language: str) -> str:
    """Return the per-language field name, e.g. ``title-en``."""
    return f"{base}-{language}"


@dataclass(frozen=True)
class LocalizedQuery:
    """Filter, projection and output renaming for one language.

    Attributes:
        language: Resolved language code.
        localized: Output key to suffixed source field.
        required: Fields that must exist for a document to match.
        passthrough: Fields returned unchanged.
    """

    language: str
    localized: dict[str, str]
    required: tuple[str, ...]
    passthrough: tuple[str, ...] = field(default=())

    @property
    def filter(self) -> QueryFilter:
        """Existence predicate on every required field."""
        return {name: {"$exists": True} for name in self.required}

    @property
    def projection(self) -> Projection:
        """Inclusion projection of the localized and pass-through fields."""
        fields = [*self.localized.values(), *self.passthrough]
        return dict.fromkeys(fields, 1)

    def reshape(self, document: Document) -> Document:
        """Copy localized values to their stable keys.

        Args:
            document: A document returned with this query's projection.

        Returns:
            Document: A new document without language-suffixed keys.
        """
        reshaped = {
            key: value
            for key, value in document.items()
            if key not in self.localized.values()
        }
        for output_key, source in self.localized.items():
            if source in document:
                reshaped[output_key] = document[source]
        return reshaped


def project_query(language: str | None) -> LocalizedQuery:
    """Build the query for the projects listing.

    A project needs a title in the requested language and a generic
    ``description``; images pass through.
    """
    lang = resolve_language(language)
    title = localized_field("title", lang)
    return LocalizedQuery(
        language=lang,
        localized={"title": title},
        required=(title, "description"),
        passthrough=("description", "images"),
    )


def price_query(language: str | None) -> LocalizedQuery:
    """Build the query for the localized price list."""
    lang = resolve_language(language)
    title = localized_field("title", lang)
    return LocalizedQuery(
        language=lang,
        localized={
            "title": title,
            "services": localized_field("services", lang),
        },
        required=(title,),
        passthrough=("price", "category", "tags", "status"),
    )
