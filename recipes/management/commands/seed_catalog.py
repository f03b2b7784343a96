from django.core.management.base import BaseCommand

from recipes.exceptions import DuplicateKey
from recipes.services.catalog import CatalogService
from recipes.services.entities import CallerIdentity

CHEFS_DATA = [
    {'name': 'Ada', 'profile': 'Cuisine familiale et plats mijotés'},
    {'name': 'Bruno', 'profile': 'Pâtisserie et desserts'},
]

TAGS_DATA = ['végétarien', 'rapide', 'dessert', 'épicé']

COLLECTIONS_DATA = ['Plats du dimanche']

RECIPES_DATA = [
    {
        'name': 'Ragoût de bœuf',
        'unique_code': 'SEED-STEW',
        'chef': 'Ada',
        'ingredients': [
            {'name': 'bœuf', 'quantity': '800g'},
            {'name': 'carotte', 'quantity': '3'},
            'farine',
            'vin rouge',
        ],
        'tags': ['épicé'],
        'collections': ['Plats du dimanche'],
    },
    {
        'name': 'Crêpes',
        'unique_code': 'SEED-CREPES',
        'chef': 'Bruno',
        'ingredients': ['farine', 'sucre', 'œufs', 'lait'],
        'tags': ['dessert', 'rapide', 'végétarien'],
        'collections': [],
    },
    {
        'name': 'Salade de lentilles',
        'unique_code': 'SEED-LENTILS',
        'chef': 'Ada',
        'ingredients': [
            {'name': 'lentilles', 'quantity': '250g'},
            {'name': 'échalote', 'quantity': '1'},
            'vinaigrette',
        ],
        'tags': ['végétarien'],
        'collections': [],
    },
]


class Command(BaseCommand):
    help = "Crée des chefs, tags, collections et recettes d'exemple (relançable sans doublons)"

    def handle(self, *args, **options):
        service = CatalogService()
        caller = CallerIdentity(authenticated=True, role='chef')

        self.stdout.write(self.style.SUCCESS("Création du catalogue d'exemple..."))

        # Chefs et collections n'ont pas de clé unique : on réutilise par nom
        existing_chefs = {chef.name: chef for chef in service.list_chefs(caller)}
        chefs = {}
        for chef_data in CHEFS_DATA:
            chef = existing_chefs.get(chef_data['name'])
            if chef:
                self.stdout.write(f"  Chef existant: {chef.name}")
            else:
                chef = service.create_chef(caller, **chef_data)
                self.stdout.write(self.style.SUCCESS(f"Chef créé: {chef.name}"))
            chefs[chef.name] = chef

        existing_tags = {tag.name: tag for tag in service.list_tags(caller)}
        tags = {}
        for tag_name in TAGS_DATA:
            if tag_name in existing_tags:
                tags[tag_name] = existing_tags[tag_name]
                self.stdout.write(f"  Tag existant: {tag_name}")
                continue
            try:
                tags[tag_name] = service.create_tag(caller, name=tag_name)
                self.stdout.write(self.style.SUCCESS(f"Tag créé: {tag_name}"))
            except DuplicateKey as e:
                self.stdout.write(self.style.WARNING(f"Tag ignoré: {e.message}"))

        existing_collections = {c.name: c for c in service.list_collections(caller)}
        collections = {}
        for collection_name in COLLECTIONS_DATA:
            collection = existing_collections.get(collection_name)
            if not collection:
                collection = service.create_collection(caller, name=collection_name)
                self.stdout.write(self.style.SUCCESS(f"Collection créée: {collection_name}"))
            collections[collection_name] = collection

        for recipe_data in RECIPES_DATA:
            try:
                recipe = service.create_recipe(
                    caller,
                    name=recipe_data['name'],
                    unique_code=recipe_data['unique_code'],
                    chef_id=chefs[recipe_data['chef']].id,
                    ingredients=recipe_data['ingredients'],
                )
            except DuplicateKey as e:
                self.stdout.write(self.style.WARNING(f"Recette ignorée: {e.message}"))
                continue

            for tag_name in recipe_data['tags']:
                if tag_name in tags:
                    service.tag_recipe(caller, recipe.id, tags[tag_name].id)
            for collection_name in recipe_data['collections']:
                service.add_to_collection(caller, recipe.id, collections[collection_name].id)
            self.stdout.write(self.style.SUCCESS(f"Recette créée: {recipe.name} ({recipe.unique_code})"))

        counts = service.summary(caller)
        self.stdout.write(self.style.SUCCESS(
            "Catalogue prêt: {chefs} chef(s), {recipes} recette(s), "
            "{collections} collection(s), {tags} tag(s)".format(**counts)
        ))
