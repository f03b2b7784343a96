from django.test import TestCase

from recipes.exceptions import NotFound
from recipes.models import Chef, Recipe
from recipes.services.counters import CounterEngine


class CounterEngineTestCase(TestCase):
    def setUp(self):
        self.engine = CounterEngine()
        chef = Chef.objects.create(name='Ada')
        self.recipe = Recipe.objects.create(name='Stew', unique_code='R1', chef=chef)

    def test_increment_returns_new_count(self):
        self.assertEqual(self.engine.increment_likes(self.recipe.id), 1)
        self.assertEqual(self.engine.increment_likes(self.recipe.id), 2)
        self.assertEqual(self.engine.increment_dislikes(self.recipe.id), 1)

        self.recipe.refresh_from_db()
        self.assertEqual(self.recipe.likes_count, 2)
        self.assertEqual(self.recipe.dislikes_count, 1)

    def test_stale_copies_do_not_lose_updates(self):
        # Deux appelants qui ont lu la recette avant le premier incrément
        stale_a = Recipe.objects.get(pk=self.recipe.id)
        stale_b = Recipe.objects.get(pk=self.recipe.id)

        self.engine.increment_likes(stale_a.id)
        self.engine.increment_likes(stale_b.id)

        self.assertEqual(Recipe.objects.get(pk=self.recipe.id).likes_count, 2)

    def test_unknown_recipe_raises_not_found(self):
        with self.assertRaises(NotFound) as ctx:
            self.engine.increment_likes(999)
        self.assertEqual(ctx.exception.kind, 'recipe')

        with self.assertRaises(NotFound):
            self.engine.increment_dislikes('abc')

