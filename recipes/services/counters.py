import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from ..exceptions import NotFound
from ..models import Recipe

logger = logging.getLogger(__name__)


class CounterEngine:
    """
    Compteurs likes / dislikes des recettes.

    L'incrément est fait en base (UPDATE ... SET likes_count = likes_count + 1) :
    N appels concurrents augmentent le compteur d'exactement N, sans
    lecture-modification-écriture côté Python.
    """

    def increment_likes(self, recipe_id) -> int:
        return self._increment(recipe_id, 'likes_count')

    def increment_dislikes(self, recipe_id) -> int:
        return self._increment(recipe_id, 'dislikes_count')

    def _increment(self, recipe_id, field: str) -> int:
        with transaction.atomic():
            try:
                updated = Recipe.objects.filter(pk=recipe_id).update(
                    **{field: F(field) + 1, 'updated_at': timezone.now()}
                )
            except (ValueError, TypeError):
                updated = 0
            if not updated:
                raise NotFound('recipe', recipe_id)

            # Relu dans la même transaction : la ligne reste verrouillée par l'UPDATE
            value = Recipe.objects.filter(pk=recipe_id).values_list(field, flat=True).get()

        logger.info("[CounterEngine] recipe %s %s=%d", recipe_id, field, value)
        return value
