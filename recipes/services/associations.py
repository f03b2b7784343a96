"""
Gestion des deux relations many-to-many (Recipe <-> Collection, Recipe <-> Tag).

Les rattachements sont idempotents : une ligne de jointure existe au plus une
fois (contrainte d'unicité en base) et un second rattachement renvoie
AttachResult.ALREADY_ATTACHED au lieu d'échouer.
"""
import logging

from django.db import transaction

from ..exceptions import AttachResult, NotFound
from ..models import Collection, CollectionRecipe, Recipe, RecipeTag, Tag

logger = logging.getLogger(__name__)

# Lignes de jointure à supprimer quand une entité disparaît
CASCADE_TARGETS = {
    'chef': [],
    'recipe': [(CollectionRecipe, 'recipe_id'), (RecipeTag, 'recipe_id')],
    'collection': [(CollectionRecipe, 'collection_id')],
    'tag': [(RecipeTag, 'tag_id')],
}


def lock_existing(model, kind, entity_id):
    """
    Verrouille la ligne (SELECT ... FOR UPDATE) ou lève NotFound.
    Doit être appelé dans une transaction.
    """
    try:
        found = list(
            model.objects.select_for_update().filter(pk=entity_id).values_list('pk', flat=True)
        )
    except (ValueError, TypeError):
        found = []
    if not found:
        raise NotFound(kind, entity_id)
    return found[0]


class AssociationManager:
    """Rattachements Recipe/Collection et Recipe/Tag"""

    def attach_tag(self, recipe_id, tag_id) -> AttachResult:
        with transaction.atomic():
            recipe_pk = lock_existing(Recipe, 'recipe', recipe_id)
            tag_pk = lock_existing(Tag, 'tag', tag_id)
            # get_or_create rattrape l'IntegrityError d'un rattachement concurrent
            _, created = RecipeTag.objects.get_or_create(recipe_id=recipe_pk, tag_id=tag_pk)

        result = AttachResult.ATTACHED if created else AttachResult.ALREADY_ATTACHED
        logger.info("[AssociationManager] tag %s -> recipe %s : %s", tag_pk, recipe_pk, result.value)
        return result

    def attach_collection(self, recipe_id, collection_id) -> AttachResult:
        with transaction.atomic():
            recipe_pk = lock_existing(Recipe, 'recipe', recipe_id)
            collection_pk = lock_existing(Collection, 'collection', collection_id)
            _, created = CollectionRecipe.objects.get_or_create(
                recipe_id=recipe_pk,
                collection_id=collection_pk,
            )

        result = AttachResult.ATTACHED if created else AttachResult.ALREADY_ATTACHED
        logger.info(
            "[AssociationManager] recipe %s -> collection %s : %s",
            recipe_pk, collection_pk, result.value
        )
        return result

    def detach_tag(self, recipe_id, tag_id) -> bool:
        with transaction.atomic():
            recipe_pk = lock_existing(Recipe, 'recipe', recipe_id)
            tag_pk = lock_existing(Tag, 'tag', tag_id)
            deleted, _ = RecipeTag.objects.filter(recipe_id=recipe_pk, tag_id=tag_pk).delete()
        logger.info("[AssociationManager] tag %s retiré de recipe %s (%d ligne)", tag_pk, recipe_pk, deleted)
        return deleted > 0

    def detach_collection(self, recipe_id, collection_id) -> bool:
        with transaction.atomic():
            recipe_pk = lock_existing(Recipe, 'recipe', recipe_id)
            collection_pk = lock_existing(Collection, 'collection', collection_id)
            deleted, _ = CollectionRecipe.objects.filter(
                recipe_id=recipe_pk,
                collection_id=collection_pk,
            ).delete()
        logger.info(
            "[AssociationManager] recipe %s retirée de collection %s (%d ligne)",
            recipe_pk, collection_pk, deleted
        )
        return deleted > 0

    def cascade_on_delete(self, kind: str, entity_id) -> int:
        """
        Supprime les lignes de jointure d'une entité sur le point d'être supprimée.
        Appelé par EntityStore.delete dans la même transaction.
        """
        if kind not in CASCADE_TARGETS:
            raise ValueError(f"Type d'entité inconnu: {kind}")

        removed = 0
        for join_model, column in CASCADE_TARGETS[kind]:
            deleted, _ = join_model.objects.filter(**{column: entity_id}).delete()
            removed += deleted
        if removed:
            logger.info("[AssociationManager] %d ligne(s) de jointure supprimée(s) pour %s %s", removed, kind, entity_id)
        return removed
