"""
Services package - Business logic layer.

This package exposes business services while avoiding heavy imports at module load time.
"""

from importlib import import_module
from typing import Any

__all__ = [
    "AppSettings",
    "CollectionService",
    "DeckService",
    "DeckValidationService",
    "DeckWizard",
    "ImageService",
    "RelationsService",
    "SearchService",
    "SetCompletionService",
    "StateService",
    "get_collection_service",
    "get_deck_service",
    "get_deck_validation_service",
    "get_image_service",
    "get_relations_service",
    "get_search_service",
    "get_set_completion_service",
    "get_state_service",
]

_LAZY_MODULES = {
    "CollectionService": "services.collection_service",
    "get_collection_service": "services.collection_service",
    "DeckService": "services.deck_service",
    "DeckWizard": "services.deck_service",
    "get_deck_service": "services.deck_service",
    "DeckValidationService": "services.deck_validation_service",
    "get_deck_validation_service": "services.deck_validation_service",
    "ImageService": "services.image_service",
    "get_image_service": "services.image_service",
    "RelationsService": "services.relations_service",
    "get_relations_service": "services.relations_service",
    "SearchService": "services.search_service",
    "get_search_service": "services.search_service",
    "SetCompletionService": "services.set_completion_service",
    "get_set_completion_service": "services.set_completion_service",
    "AppSettings": "services.state_service",
    "StateService": "services.state_service",
}


def __getattr__(name: str) -> Any:
    if name in _LAZY_MODULES:
        module = import_module(_LAZY_MODULES[name])
        value = getattr(module, name)
        globals()[name] = value
        return value

    raise AttributeError(f"module 'services' has no attribute '{name}'")


def get_state_service():
    from services.state_service import StateService

    return StateService()
