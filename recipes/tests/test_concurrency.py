"""
Écritures concurrentes réelles : plusieurs threads, chacun avec sa connexion.

Nécessite une base partagée entre connexions (PostgreSQL, ou SQLite sur
fichier via DATABASES['default']['TEST']['NAME']).
"""
import threading
from collections import Counter

from django.db import connection
from django.test import TransactionTestCase

from recipes.exceptions import DuplicateKey
from recipes.models import Chef, Recipe, Tag
from recipes.services.counters import CounterEngine
from recipes.services.store import RecipeStore, TagStore


class ConcurrentWritesTestCase(TransactionTestCase):

    def setUp(self):
        if connection.vendor == 'sqlite' and connection.is_in_memory_db():
            self.skipTest('Base SQLite en mémoire : non partagée entre threads')

    def run_threads(self, target, count):
        """Lance `count` threads synchronisés sur une barrière, renvoie leurs issues"""
        barrier = threading.Barrier(count)
        outcomes = []
        lock = threading.Lock()

        def worker():
            try:
                barrier.wait()
                target()
                outcome = 'ok'
            except DuplicateKey:
                outcome = 'dup'
            except Exception as e:
                outcome = f"{type(e).__name__}: {e}"
            finally:
                connection.close()
            with lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return outcomes


class UniqueCodeRaceTestCase(ConcurrentWritesTestCase):
    ROUNDS = 20

    def test_racing_creates_give_one_success_and_one_duplicate(self):
        chef = Chef.objects.create(name='Ada')
        totals = Counter()

        for i in range(self.ROUNDS):
            code = f'C{i}'
            outcomes = self.run_threads(
                lambda: RecipeStore().create(name='Stew', unique_code=code, chef_id=chef.id),
                2
            )
            totals.update(outcomes)
            self.assertEqual(Recipe.objects.filter(unique_code=code).count(), 1)

        self.assertEqual(totals, Counter({'ok': self.ROUNDS, 'dup': self.ROUNDS}))


class TagNameRaceTestCase(ConcurrentWritesTestCase):
    ROUNDS = 20

    def test_racing_tag_creates_give_one_success_and_one_duplicate(self):
        totals = Counter()

        for i in range(self.ROUNDS):
            name = f'tag-{i}'
            outcomes = self.run_threads(lambda: TagStore().create(name=name), 2)
            totals.update(outcomes)
            self.assertEqual(Tag.objects.filter(name=name).count(), 1)

        self.assertEqual(totals, Counter({'ok': self.ROUNDS, 'dup': self.ROUNDS}))


class ConcurrentLikesTestCase(ConcurrentWritesTestCase):
    WORKERS = 8
    PER_WORKER = 5

    def test_concurrent_likes_are_all_counted(self):
        chef = Chef.objects.create(name='Ada')
        recipe = Recipe.objects.create(name='Stew', unique_code='R1', chef=chef)

        def like_repeatedly():
            engine = CounterEngine()
            for _ in range(self.PER_WORKER):
                engine.increment_likes(recipe.id)

        outcomes = self.run_threads(like_repeatedly, self.WORKERS)

        self.assertEqual(outcomes, ['ok'] * self.WORKERS)
        recipe.refresh_from_db()
        self.assertEqual(recipe.likes_count, self.WORKERS * self.PER_WORKER)
