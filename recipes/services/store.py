"""
Entity Store : création, mise à jour, suppression et lecture des entités.

Chaque écriture suit le même déroulé, dans une transaction :
1. validation des champs (validateurs du modèle, avant toute écriture)
2. vérification des références (ex: chef_id d'une recette)
3. pré-contrôle d'unicité (en excluant la ligne elle-même lors d'un update)
4. écriture dans un savepoint ; la contrainte UNIQUE en base reste l'arbitre
   final et une IntegrityError due à un créateur concurrent devient DuplicateKey.
"""
import logging
from typing import List

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from ..exceptions import DuplicateKey, NotFound, ReferenceConflict, ValidationError
from ..models import Chef, Collection, Recipe, Tag
from .associations import AssociationManager, lock_existing
from .entities import ChefRecord, CollectionRecord, RecipeRecord, TagRecord

logger = logging.getLogger(__name__)


class EntityStore:
    model = None
    record_class = None
    kind = None
    writable_fields = ()
    unique_fields = ()
    # Champs validés ailleurs que par full_clean (références)
    clean_exclude = ()

    def __init__(self, associations=None):
        self.associations = associations or AssociationManager()

    # Lecture

    def get_by_id(self, entity_id):
        return self.record_class.model_validate(self._get_instance(entity_id))

    def get_all(self) -> List:
        return [self.record_class.model_validate(obj) for obj in self.model.objects.all()]

    def count(self) -> int:
        return self.model.objects.count()

    # Écriture

    def create(self, **fields):
        self._check_writable(fields)
        fields = self._prepare(fields)
        with transaction.atomic():
            instance = self.model(**fields)
            self._validate(instance)
            self._check_references(instance)
            self._check_unique(instance)
            self._save(instance)

        logger.info("[EntityStore] %s %s créé", self.kind, instance.pk)
        return self.record_class.model_validate(instance)

    def update(self, entity_id, **fields):
        self._check_writable(fields)
        fields = self._prepare(fields)
        with transaction.atomic():
            instance = self._get_instance(entity_id, for_update=True)
            for name, value in fields.items():
                setattr(instance, name, value)
            self._validate(instance)
            self._check_references(instance)
            self._check_unique(instance)
            self._save(instance, update_fields=list(fields) + ['updated_at'])

        logger.info("[EntityStore] %s %s mis à jour (%s)", self.kind, instance.pk, ', '.join(fields) or '-')
        return self.record_class.model_validate(instance)

    def delete(self, entity_id) -> None:
        with transaction.atomic():
            instance = self._get_instance(entity_id, for_update=True)
            self._check_can_delete(instance)
            self.associations.cascade_on_delete(self.kind, instance.pk)
            try:
                instance.delete()
            except ProtectedError:
                raise ReferenceConflict(self.kind, entity_id, 'encore référencé')

        logger.info("[EntityStore] %s %s supprimé", self.kind, entity_id)

    # Étapes internes

    def _get_instance(self, entity_id, for_update=False):
        queryset = self.model.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=entity_id)
        except (self.model.DoesNotExist, ValueError, TypeError):
            raise NotFound(self.kind, entity_id)

    def _check_writable(self, fields):
        unknown = sorted(set(fields) - set(self.writable_fields))
        if unknown:
            raise ValidationError({name: ['Champ non modifiable.'] for name in unknown})

    def _prepare(self, fields):
        return fields

    def _validate(self, instance):
        try:
            instance.full_clean(
                exclude=list(self.clean_exclude),
                validate_unique=False,
                validate_constraints=False,
            )
        except DjangoValidationError as exc:
            raise ValidationError(exc.message_dict)

    def _check_references(self, instance):
        pass

    def _check_can_delete(self, instance):
        pass

    def _conflicting_field(self, instance):
        """Premier champ unique déjà pris par une autre ligne, sinon None"""
        for field in self.unique_fields:
            value = getattr(instance, field)
            others = self.model.objects.filter(**{field: value})
            if instance.pk is not None:
                others = others.exclude(pk=instance.pk)
            if others.exists():
                return field
        return None

    def _check_unique(self, instance):
        field = self._conflicting_field(instance)
        if field:
            logger.warning(
                "[EntityStore] %s.%s '%s' déjà utilisé", self.kind, field, getattr(instance, field)
            )
            raise DuplicateKey(self.kind, field, getattr(instance, field))

    def _save(self, instance, update_fields=None):
        try:
            with transaction.atomic():
                instance.save(update_fields=update_fields)
        except IntegrityError:
            # Un créateur concurrent a gagné la course après le pré-contrôle
            field = self._conflicting_field(instance)
            if field:
                logger.warning(
                    "[EntityStore] %s.%s '%s' pris par une écriture concurrente",
                    self.kind, field, getattr(instance, field)
                )
                raise DuplicateKey(self.kind, field, getattr(instance, field))
            raise


class ChefStore(EntityStore):
    model = Chef
    record_class = ChefRecord
    kind = 'chef'
    writable_fields = ('name', 'profile')

    def _check_can_delete(self, instance):
        count = Recipe.objects.filter(chef_id=instance.pk).count()
        if count:
            logger.warning("[EntityStore] chef %s possède encore %d recette(s)", instance.pk, count)
            raise ReferenceConflict(self.kind, instance.pk, f"{count} recette(s) rattachée(s)")


class RecipeStore(EntityStore):
    model = Recipe
    record_class = RecipeRecord
    kind = 'recipe'
    writable_fields = ('name', 'unique_code', 'chef_id', 'ingredients')
    unique_fields = ('unique_code',)
    clean_exclude = ('chef',)

    def _prepare(self, fields):
        if 'ingredients' in fields and fields['ingredients'] is None:
            fields = {**fields, 'ingredients': []}
        return fields

    def _check_references(self, instance):
        if instance.chef_id is None:
            raise ValidationError.for_field('chef_id', 'Ce champ est obligatoire.')
        # Verrou sur le chef : une suppression concurrente attend la fin de l'écriture
        lock_existing(Chef, 'chef', instance.chef_id)


class CollectionStore(EntityStore):
    model = Collection
    record_class = CollectionRecord
    kind = 'collection'
    writable_fields = ('name',)


class TagStore(EntityStore):
    model = Tag
    record_class = TagRecord
    kind = 'tag'
    writable_fields = ('name',)
    unique_fields = ('name',)
