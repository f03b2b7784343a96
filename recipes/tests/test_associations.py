from django.test import TestCase

from recipes.exceptions import AttachResult, NotFound
from recipes.models import Chef, Collection, CollectionRecipe, Recipe, RecipeTag, Tag
from recipes.services.associations import AssociationManager
from recipes.services.store import CollectionStore, TagStore


class AssociationManagerTestCase(TestCase):
    def setUp(self):
        self.manager = AssociationManager()
        chef = Chef.objects.create(name='Ada')
        self.recipe = Recipe.objects.create(name='Stew', unique_code='R1', chef=chef, ingredients=['flour'])
        self.other_recipe = Recipe.objects.create(name='Soup', unique_code='R2', chef=chef)
        self.tag = Tag.objects.create(name='spicy')
        self.collection = Collection.objects.create(name='Mains')

    def test_attach_tag_twice_is_idempotent(self):
        self.assertEqual(self.manager.attach_tag(self.recipe.id, self.tag.id), AttachResult.ATTACHED)
        self.assertEqual(self.manager.attach_tag(self.recipe.id, self.tag.id), AttachResult.ALREADY_ATTACHED)
        self.assertEqual(RecipeTag.objects.filter(recipe=self.recipe, tag=self.tag).count(), 1)

    def test_attach_tag_names_missing_side(self):
        with self.assertRaises(NotFound) as ctx:
            self.manager.attach_tag(999, self.tag.id)
        self.assertEqual(ctx.exception.kind, 'recipe')

        with self.assertRaises(NotFound) as ctx:
            self.manager.attach_tag(self.recipe.id, 999)
        self.assertEqual(ctx.exception.kind, 'tag')
        self.assertFalse(RecipeTag.objects.exists())

    def test_attach_collection_is_idempotent(self):
        self.assertEqual(
            self.manager.attach_collection(self.recipe.id, self.collection.id),
            AttachResult.ATTACHED
        )
        self.assertEqual(
            self.manager.attach_collection(self.recipe.id, self.collection.id),
            AttachResult.ALREADY_ATTACHED
        )
        self.assertEqual(CollectionRecipe.objects.count(), 1)

    def test_attach_collection_missing_collection(self):
        with self.assertRaises(NotFound) as ctx:
            self.manager.attach_collection(self.recipe.id, 'abc')
        self.assertEqual(ctx.exception.kind, 'collection')

    def test_detach_reports_whether_a_row_was_removed(self):
        self.manager.attach_tag(self.recipe.id, self.tag.id)
        self.assertTrue(self.manager.detach_tag(self.recipe.id, self.tag.id))
        self.assertFalse(self.manager.detach_tag(self.recipe.id, self.tag.id))

        self.manager.attach_collection(self.recipe.id, self.collection.id)
        self.assertTrue(self.manager.detach_collection(self.recipe.id, self.collection.id))
        self.assertFalse(self.manager.detach_collection(self.recipe.id, self.collection.id))

    def test_detach_missing_entity_raises(self):
        with self.assertRaises(NotFound):
            self.manager.detach_collection(self.recipe.id, 999)

    def test_cascade_on_delete_removes_only_matching_rows(self):
        self.manager.attach_tag(self.recipe.id, self.tag.id)
        self.manager.attach_tag(self.other_recipe.id, self.tag.id)
        self.manager.attach_collection(self.recipe.id, self.collection.id)

        removed = self.manager.cascade_on_delete('recipe', self.recipe.id)

        self.assertEqual(removed, 2)
        self.assertEqual(list(RecipeTag.objects.values_list('recipe_id', flat=True)), [self.other_recipe.id])
        self.assertFalse(CollectionRecipe.objects.exists())

    def test_cascade_on_delete_unknown_kind(self):
        with self.assertRaises(ValueError):
            self.manager.cascade_on_delete('ingredient', 1)

    def test_deleting_collection_keeps_recipes(self):
        self.manager.attach_collection(self.recipe.id, self.collection.id)
        CollectionStore(self.manager).delete(self.collection.id)

        self.assertTrue(Recipe.objects.filter(pk=self.recipe.id).exists())
        self.assertFalse(CollectionRecipe.objects.exists())

    def test_deleting_tag_removes_its_rows(self):
        self.manager.attach_tag(self.recipe.id, self.tag.id)
        TagStore(self.manager).delete(self.tag.id)

        self.assertFalse(RecipeTag.objects.exists())
        self.assertTrue(Recipe.objects.filter(pk=self.recipe.id).exists())
