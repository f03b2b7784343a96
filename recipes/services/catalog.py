"""
Service du catalogue : point d'entrée unique des couches externes (HTTP, commandes).

Chaque opération reçoit l'identité de l'appelant (CallerIdentity) telle que
résolue par la couche d'authentification. Toutes exigent un appelant
authentifié ; la création de recette exige en plus le rôle 'chef'.
"""
import logging
from typing import Any, Dict, List, Optional

from django.db import transaction

from ..exceptions import AttachResult, AuthenticationRequired, RoleRequired, ValidationError
from .associations import AssociationManager
from .counters import CounterEngine
from .entities import (
    CallerIdentity,
    ChefRecord,
    CollectionRecord,
    RecipeRecord,
    RecipeWithRelations,
    TagRecord,
)
from .queries import QueryEngine
from .store import ChefStore, CollectionStore, RecipeStore, TagStore

logger = logging.getLogger(__name__)

CHEF_ROLE = 'chef'


class CatalogService:

    def __init__(self, associations=None, counters=None, queries=None):
        self.associations = associations or AssociationManager()
        self.counters = counters or CounterEngine()
        self.queries = queries or QueryEngine()

        self.chefs = ChefStore(self.associations)
        self.recipes = RecipeStore(self.associations)
        self.collections = CollectionStore(self.associations)
        self.tags = TagStore(self.associations)

    # ========== Contrôle d'accès ==========

    def _require_authenticated(self, caller: Optional[CallerIdentity]):
        if caller is None or not caller.authenticated:
            raise AuthenticationRequired()

    def _require_role(self, caller: Optional[CallerIdentity], role: str, message: str):
        self._require_authenticated(caller)
        if caller.role != role:
            logger.warning("[CatalogService] Rôle '%s' refusé (requis: '%s')", caller.role, role)
            raise RoleRequired(role, message)

    # ========== Chefs ==========

    def list_chefs(self, caller) -> List[ChefRecord]:
        self._require_authenticated(caller)
        return self.chefs.get_all()

    def get_chef(self, caller, chef_id) -> ChefRecord:
        self._require_authenticated(caller)
        return self.chefs.get_by_id(chef_id)

    def create_chef(self, caller, name, profile=None) -> ChefRecord:
        self._require_authenticated(caller)
        return self.chefs.create(name=name, profile=profile)

    def update_chef(self, caller, chef_id, **fields) -> ChefRecord:
        self._require_authenticated(caller)
        return self.chefs.update(chef_id, **fields)

    def delete_chef(self, caller, chef_id) -> None:
        self._require_authenticated(caller)
        self.chefs.delete(chef_id)

    # ========== Recettes ==========

    def list_recipes(self, caller) -> List[RecipeWithRelations]:
        self._require_authenticated(caller)
        return self.queries.list_recipes()

    def get_recipe(self, caller, recipe_id, with_relations: bool = True):
        self._require_authenticated(caller)
        if with_relations:
            return self.queries.get_recipe(recipe_id)
        return self.recipes.get_by_id(recipe_id)

    def create_recipe(self, caller, name, unique_code, chef_id,
                      ingredients: Optional[List[Any]] = None) -> RecipeRecord:
        """
        Crée une recette pour un chef existant.
        Compteurs initialisés à 0 ; aucune ligne écrite si le chef n'existe pas.
        """
        self._require_role(caller, CHEF_ROLE, 'Only chef can create recipes')
        if chef_id is None:
            raise ValidationError.for_field('chef_id', 'Ce champ est obligatoire.')

        with transaction.atomic():
            self.chefs.get_by_id(chef_id)
            recipe = self.recipes.create(
                name=name,
                unique_code=unique_code,
                chef_id=chef_id,
                ingredients=ingredients if ingredients is not None else [],
            )

        logger.info("[CatalogService] Recette '%s' créée (chef %s)", recipe.unique_code, chef_id)
        return recipe

    def update_recipe(self, caller, recipe_id, **fields) -> RecipeRecord:
        self._require_authenticated(caller)
        return self.recipes.update(recipe_id, **fields)

    def delete_recipe(self, caller, recipe_id) -> None:
        self._require_authenticated(caller)
        self.recipes.delete(recipe_id)

    def like(self, caller, recipe_id) -> int:
        self._require_authenticated(caller)
        return self.counters.increment_likes(recipe_id)

    def dislike(self, caller, recipe_id) -> int:
        self._require_authenticated(caller)
        return self.counters.increment_dislikes(recipe_id)

    def find_by_ingredient_excluding_collections(self, caller, ingredient) -> List[RecipeRecord]:
        self._require_authenticated(caller)
        return self.queries.find_by_ingredient_excluding_collections(ingredient)

    # ========== Collections ==========

    def list_collections(self, caller) -> List[CollectionRecord]:
        self._require_authenticated(caller)
        return self.collections.get_all()

    def get_collection(self, caller, collection_id) -> CollectionRecord:
        self._require_authenticated(caller)
        return self.collections.get_by_id(collection_id)

    def create_collection(self, caller, name) -> CollectionRecord:
        self._require_authenticated(caller)
        return self.collections.create(name=name)

    def update_collection(self, caller, collection_id, **fields) -> CollectionRecord:
        self._require_authenticated(caller)
        return self.collections.update(collection_id, **fields)

    def delete_collection(self, caller, collection_id) -> None:
        self._require_authenticated(caller)
        self.collections.delete(collection_id)

    def add_to_collection(self, caller, recipe_id, collection_id) -> AttachResult:
        self._require_authenticated(caller)
        return self.associations.attach_collection(recipe_id, collection_id)

    def remove_from_collection(self, caller, recipe_id, collection_id) -> bool:
        self._require_authenticated(caller)
        return self.associations.detach_collection(recipe_id, collection_id)

    def recipes_in_collection(self, caller, collection_id) -> List[RecipeRecord]:
        self._require_authenticated(caller)
        return self.queries.recipes_in_collection(collection_id)

    # ========== Tags ==========

    def list_tags(self, caller) -> List[TagRecord]:
        self._require_authenticated(caller)
        return self.tags.get_all()

    def get_tag(self, caller, tag_id) -> TagRecord:
        self._require_authenticated(caller)
        return self.tags.get_by_id(tag_id)

    def create_tag(self, caller, name) -> TagRecord:
        self._require_authenticated(caller)
        return self.tags.create(name=name)

    def update_tag(self, caller, tag_id, **fields) -> TagRecord:
        self._require_authenticated(caller)
        return self.tags.update(tag_id, **fields)

    def delete_tag(self, caller, tag_id) -> None:
        self._require_authenticated(caller)
        self.tags.delete(tag_id)

    def tag_recipe(self, caller, recipe_id, tag_id) -> AttachResult:
        self._require_authenticated(caller)
        return self.associations.attach_tag(recipe_id, tag_id)

    def untag_recipe(self, caller, recipe_id, tag_id) -> bool:
        self._require_authenticated(caller)
        return self.associations.detach_tag(recipe_id, tag_id)

    def recipes_by_tag(self, caller, tag_id) -> List[RecipeRecord]:
        self._require_authenticated(caller)
        return self.queries.recipes_by_tag(tag_id)

    # ========== Divers ==========

    def summary(self, caller) -> Dict[str, int]:
        """Nombre d'entités par type (utilisé par seed_catalog)"""
        self._require_authenticated(caller)
        return {
            'chefs': self.chefs.count(),
            'recipes': self.recipes.count(),
            'collections': self.collections.count(),
            'tags': self.tags.count(),
        }
