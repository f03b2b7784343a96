"""
Lectures du catalogue.

Les relations sont chargées d'avance (select_related / prefetch_related) :
le nombre de requêtes ne dépend pas du nombre de recettes renvoyées.
"""
import logging
from typing import List

from django.db import connection
from django.db.models import Exists, OuterRef, Q

from ..exceptions import NotFound, ValidationError
from ..models import Collection, CollectionRecipe, Recipe, Tag
from .entities import RecipeRecord, RecipeWithRelations
from .ingredient_matcher import containment_lookups, ingredients_contain, normalize_search_term

logger = logging.getLogger(__name__)


class QueryEngine:

    def _with_relations(self, queryset):
        return queryset.select_related('chef').prefetch_related('collections', 'tags')

    def list_recipes(self) -> List[RecipeWithRelations]:
        recipes = self._with_relations(Recipe.objects.all())
        return [RecipeWithRelations.from_instance(recipe) for recipe in recipes]

    def get_recipe(self, recipe_id) -> RecipeWithRelations:
        try:
            recipe = self._with_relations(Recipe.objects.filter(pk=recipe_id)).get()
        except (Recipe.DoesNotExist, ValueError, TypeError):
            raise NotFound('recipe', recipe_id)
        return RecipeWithRelations.from_instance(recipe)

    def find_by_ingredient_excluding_collections(self, ingredient) -> List[RecipeRecord]:
        """
        Recettes qui contiennent l'ingrédient ET n'appartiennent à aucune collection.

        Si la base sait faire du `contains` sur du JSON (PostgreSQL), on pré-filtre
        en SQL ; le prédicat Python reste appliqué dans tous les cas pour garder
        la même sémantique d'une base à l'autre.
        """
        term = normalize_search_term(ingredient)
        if not term:
            raise ValidationError.for_field('ingredient', 'Ce champ ne peut pas être vide.')

        in_collection = CollectionRecipe.objects.filter(recipe_id=OuterRef('pk'))
        queryset = Recipe.objects.filter(~Exists(in_collection))

        if connection.features.supports_json_field_contains:
            prefilter = Q()
            for value in containment_lookups(term):
                prefilter |= Q(ingredients__contains=value)
            queryset = queryset.filter(prefilter)

        results = [
            RecipeRecord.model_validate(recipe)
            for recipe in queryset
            if ingredients_contain(recipe.ingredients, term)
        ]
        logger.info("[QueryEngine] ingrédient '%s' hors collection : %d recette(s)", term, len(results))
        return results

    def recipes_by_tag(self, tag_id) -> List[RecipeRecord]:
        if not self._exists(Tag, tag_id):
            raise NotFound('tag', tag_id)
        recipes = Recipe.objects.filter(recipe_tags__tag_id=tag_id)
        return [RecipeRecord.model_validate(recipe) for recipe in recipes]

    def recipes_in_collection(self, collection_id) -> List[RecipeRecord]:
        if not self._exists(Collection, collection_id):
            raise NotFound('collection', collection_id)
        recipes = Recipe.objects.filter(collection_recipes__collection_id=collection_id)
        return [RecipeRecord.model_validate(recipe) for recipe in recipes]

    @staticmethod
    def _exists(model, entity_id) -> bool:
        try:
            return model.objects.filter(pk=entity_id).exists()
        except (ValueError, TypeError):
            return False
