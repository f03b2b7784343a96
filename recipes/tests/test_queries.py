from django.test import TestCase

from recipes.exceptions import NotFound, ValidationError
from recipes.models import Chef, Collection, CollectionRecipe, Recipe, RecipeTag, Tag
from recipes.services.entities import RecipeWithRelations
from recipes.services.queries import QueryEngine


class QueryEngineTestCase(TestCase):
    def setUp(self):
        self.engine = QueryEngine()
        self.chef = Chef.objects.create(name='Ada')
        self.stew = Recipe.objects.create(
            name='Stew', unique_code='R1', chef=self.chef, ingredients=['flour', 'sugar']
        )
        self.cake = Recipe.objects.create(
            name='Cake', unique_code='R2', chef=self.chef,
            ingredients=[{'name': 'flour', 'quantity': '200g'}, {'name': 'egg', 'quantity': '2'}]
        )
        self.salad = Recipe.objects.create(
            name='Salad', unique_code='R3', chef=self.chef, ingredients=['lettuce']
        )
        self.collection = Collection.objects.create(name='Mains')
        self.tag = Tag.objects.create(name='spicy')

    def test_list_recipes_resolves_relations(self):
        CollectionRecipe.objects.create(collection=self.collection, recipe=self.stew)
        RecipeTag.objects.create(recipe=self.stew, tag=self.tag)

        recipes = self.engine.list_recipes()

        self.assertEqual(len(recipes), 3)
        self.assertTrue(all(isinstance(r, RecipeWithRelations) for r in recipes))
        stew = next(r for r in recipes if r.id == self.stew.id)
        self.assertEqual(stew.chef.name, 'Ada')
        self.assertEqual([c.name for c in stew.collections], ['Mains'])
        self.assertEqual([t.name for t in stew.tags], ['spicy'])

    def test_list_recipes_query_count_does_not_grow(self):
        for i in range(5):
            recipe = Recipe.objects.create(name=f'Extra {i}', unique_code=f'X{i}', chef=self.chef)
            RecipeTag.objects.create(recipe=recipe, tag=self.tag)

        # recettes + chefs (jointure), collections, tags
        with self.assertNumQueries(3):
            self.engine.list_recipes()

    def test_get_recipe_with_relations(self):
        recipe = self.engine.get_recipe(self.cake.id)
        self.assertEqual(recipe.unique_code, 'R2')
        self.assertEqual(recipe.chef.id, self.chef.id)

        with self.assertRaises(NotFound):
            self.engine.get_recipe(999)

    def test_find_by_ingredient_matches_both_shapes(self):
        found = self.engine.find_by_ingredient_excluding_collections('flour')
        self.assertEqual({r.id for r in found}, {self.stew.id, self.cake.id})

    def test_find_by_ingredient_excludes_recipes_in_collections(self):
        CollectionRecipe.objects.create(collection=self.collection, recipe=self.stew)

        found = self.engine.find_by_ingredient_excluding_collections('flour')
        self.assertEqual([r.id for r in found], [self.cake.id])

    def test_find_by_ingredient_reappears_after_removal(self):
        membership = CollectionRecipe.objects.create(collection=self.collection, recipe=self.stew)
        membership.delete()

        found = self.engine.find_by_ingredient_excluding_collections('sugar')
        self.assertEqual([r.id for r in found], [self.stew.id])

    def test_find_by_ingredient_no_match_is_empty(self):
        self.assertEqual(self.engine.find_by_ingredient_excluding_collections('saffron'), [])
        self.assertEqual(self.engine.find_by_ingredient_excluding_collections('Flour'), [])

    def test_find_by_ingredient_strips_term(self):
        found = self.engine.find_by_ingredient_excluding_collections('  lettuce ')
        self.assertEqual([r.id for r in found], [self.salad.id])

    def test_find_by_ingredient_rejects_blank_term(self):
        with self.assertRaises(ValidationError) as ctx:
            self.engine.find_by_ingredient_excluding_collections('   ')
        self.assertIn('ingredient', ctx.exception.errors)

    def test_recipes_by_tag(self):
        RecipeTag.objects.create(recipe=self.cake, tag=self.tag)
        self.assertEqual([r.id for r in self.engine.recipes_by_tag(self.tag.id)], [self.cake.id])

        with self.assertRaises(NotFound) as ctx:
            self.engine.recipes_by_tag(999)
        self.assertEqual(ctx.exception.kind, 'tag')

    def test_recipes_in_collection(self):
        CollectionRecipe.objects.create(collection=self.collection, recipe=self.salad)
        self.assertEqual(
            [r.id for r in self.engine.recipes_in_collection(self.collection.id)],
            [self.salad.id]
        )

        with self.assertRaises(NotFound):
            self.engine.recipes_in_collection(999)
