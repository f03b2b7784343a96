"""
Valeurs immuables renvoyées par les composants du catalogue.

Aucune instance de modèle Django ne sort de recipes.services : chaque
opération renvoie un de ces objets, construit à partir de la ligne en base.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)


class ChefRecord(Entity):
    id: int
    name: str
    profile: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TagRecord(Entity):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class CollectionRecord(Entity):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class RecipeRecord(Entity):
    """Recette sans ses relations"""
    id: int
    name: str
    unique_code: str
    chef_id: int
    ingredients: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    likes_count: int = Field(default=0, ge=0)
    dislikes_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime


class RecipeWithRelations(RecipeRecord):
    """Recette avec chef, collections et tags résolus d'avance"""
    chef: ChefRecord
    collections: List[CollectionRecord] = Field(default_factory=list)
    tags: List[TagRecord] = Field(default_factory=list)

    @classmethod
    def from_instance(cls, recipe) -> 'RecipeWithRelations':
        # Les relations doivent avoir été préchargées (select_related / prefetch_related)
        return cls(
            **RecipeRecord.model_validate(recipe).model_dump(),
            chef=ChefRecord.model_validate(recipe.chef),
            collections=[CollectionRecord.model_validate(c) for c in recipe.collections.all()],
            tags=[TagRecord.model_validate(t) for t in recipe.tags.all()],
        )


class CallerIdentity(Entity):
    """Identité de l'appelant telle que résolue par la couche d'authentification"""
    authenticated: bool = False
    role: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> 'CallerIdentity':
        if user is None or not getattr(user, 'is_authenticated', False):
            return cls(authenticated=False)
        return cls(authenticated=True, role=getattr(user, 'role', None))
