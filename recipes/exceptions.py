"""
Erreurs du catalogue de recettes.

Toutes les opérations du domaine lèvent une sous-classe de CatalogError ;
la couche HTTP les traduit en codes de statut (voir chefbook.exceptions).
"""
from enum import Enum
from typing import Dict, List, Optional


class AttachResult(str, Enum):
    """Issue d'un rattachement (ce n'est pas une erreur)"""
    ATTACHED = 'attached'
    ALREADY_ATTACHED = 'already_attached'


class CatalogError(Exception):
    """Base des erreurs du domaine"""
    default_message = 'Erreur du catalogue'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CatalogError):
    """Champ manquant ou invalide ; ne doit jamais être rejoué tel quel"""
    default_message = 'Les données fournies sont invalides.'

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str) -> 'ValidationError':
        return cls({field: [message]})


class NotFound(CatalogError):
    def __init__(self, kind: str, entity_id):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} introuvable")


class DuplicateKey(CatalogError):
    """Valeur déjà prise pour un champ unique : l'appelant doit en choisir une autre"""

    def __init__(self, kind: str, field: str, value):
        self.kind = kind
        self.field = field
        self.value = value
        super().__init__(f"{kind}.{field} '{value}' existe déjà")


class ReferenceConflict(CatalogError):
    """Suppression refusée : l'entité est encore référencée"""

    def __init__(self, kind: str, entity_id, detail: str):
        self.kind = kind
        self.entity_id = entity_id
        self.detail = detail
        super().__init__(f"{kind} {entity_id} ne peut pas être supprimé : {detail}")


class AuthenticationRequired(CatalogError):
    default_message = 'Authentification requise.'


class RoleRequired(CatalogError):
    def __init__(self, role: str, message: Optional[str] = None):
        self.role = role
        super().__init__(message or f"Rôle '{role}' requis")
