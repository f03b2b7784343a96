from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .exceptions import AttachResult
from .serializers import (
    AddToCollectionSerializer,
    ChefInputSerializer,
    ChefSerializer,
    CollectionInputSerializer,
    CollectionSerializer,
    IngredientSearchSerializer,
    RecipeDetailSerializer,
    RecipeInputSerializer,
    RecipeSerializer,
    TagInputSerializer,
    TagSerializer,
)
from .services.catalog import CatalogService
from .services.entities import CallerIdentity


class CatalogViewSet(viewsets.ViewSet):
    """
    Base des vues du catalogue : parse le corps de la requête, construit
    l'identité de l'appelant et délègue à une opération du CatalogService.
    """
    permission_classes = [IsAuthenticated]
    input_serializer_class = None
    output_serializer_class = None

    def get_service(self):
        return CatalogService()

    def get_caller(self):
        return CallerIdentity.from_user(self.request.user)

    def parse(self, serializer_class=None, partial=False):
        serializer = (serializer_class or self.input_serializer_class)(
            data=self.request.data,
            partial=partial
        )
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    def render(self, value, many=False, serializer_class=None, status_code=status.HTTP_200_OK):
        serializer = (serializer_class or self.output_serializer_class)(value, many=many)
        return Response(serializer.data, status=status_code)


class ChefViewSet(CatalogViewSet):
    input_serializer_class = ChefInputSerializer
    output_serializer_class = ChefSerializer

    def list(self, request):
        return self.render(self.get_service().list_chefs(self.get_caller()), many=True)

    def create(self, request):
        chef = self.get_service().create_chef(self.get_caller(), **self.parse())
        return self.render(chef, status_code=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return self.render(self.get_service().get_chef(self.get_caller(), pk))

    def update(self, request, pk=None):
        chef = self.get_service().update_chef(self.get_caller(), pk, **self.parse())
        return self.render(chef)

    def partial_update(self, request, pk=None):
        chef = self.get_service().update_chef(self.get_caller(), pk, **self.parse(partial=True))
        return self.render(chef)

    def destroy(self, request, pk=None):
        self.get_service().delete_chef(self.get_caller(), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecipeViewSet(CatalogViewSet):
    input_serializer_class = RecipeInputSerializer
    output_serializer_class = RecipeSerializer

    def list(self, request):
        """Liste des recettes avec chef, collections et tags"""
        recipes = self.get_service().list_recipes(self.get_caller())
        return self.render(recipes, many=True, serializer_class=RecipeDetailSerializer)

    def create(self, request):
        """Création réservée aux utilisateurs de rôle 'chef'"""
        recipe = self.get_service().create_recipe(self.get_caller(), **self.parse())
        return self.render(recipe, status_code=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], url_path='create', url_name='create-alias')
    def create_alias(self, request):
        return self.create(request)

    def retrieve(self, request, pk=None):
        recipe = self.get_service().get_recipe(self.get_caller(), pk, with_relations=True)
        return self.render(recipe, serializer_class=RecipeDetailSerializer)

    def update(self, request, pk=None):
        recipe = self.get_service().update_recipe(self.get_caller(), pk, **self.parse())
        return self.render(recipe)

    def partial_update(self, request, pk=None):
        recipe = self.get_service().update_recipe(self.get_caller(), pk, **self.parse(partial=True))
        return self.render(recipe)

    def destroy(self, request, pk=None):
        self.get_service().delete_recipe(self.get_caller(), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def like(self, request, pk=None):
        likes = self.get_service().like(self.get_caller(), pk)
        return Response({'message': 'Recipe liked successfully', 'likes_count': likes})

    @action(detail=True, methods=['post'])
    def dislike(self, request, pk=None):
        dislikes = self.get_service().dislike(self.get_caller(), pk)
        return Response({'message': 'Recipe disliked successfully', 'dislikes_count': dislikes})

    @action(detail=True, methods=['post'], url_path='add-to-collection')
    def add_to_collection(self, request, pk=None):
        data = self.parse(AddToCollectionSerializer)
        result = self.get_service().add_to_collection(self.get_caller(), pk, data['collection_id'])
        message = (
            'Recipe added to collection successfully' if result == AttachResult.ATTACHED
            else 'Recipe already in collection'
        )
        return Response({'message': message, 'status': result.value})

    @action(detail=True, methods=['post'], url_path='remove-from-collection')
    def remove_from_collection(self, request, pk=None):
        data = self.parse(AddToCollectionSerializer)
        removed = self.get_service().remove_from_collection(self.get_caller(), pk, data['collection_id'])
        message = 'Recipe removed from collection' if removed else 'Recipe was not in collection'
        return Response({'message': message, 'removed': removed})

    @action(detail=False, methods=['post'], url_path='not-in-collection')
    def not_in_collection(self, request):
        """Recettes contenant l'ingrédient et absentes de toute collection"""
        data = self.parse(IngredientSearchSerializer)
        recipes = self.get_service().find_by_ingredient_excluding_collections(
            self.get_caller(), data['ingredient']
        )
        return self.render(recipes, many=True)


class CollectionViewSet(CatalogViewSet):
    input_serializer_class = CollectionInputSerializer
    output_serializer_class = CollectionSerializer

    def list(self, request):
        return self.render(self.get_service().list_collections(self.get_caller()), many=True)

    def create(self, request):
        collection = self.get_service().create_collection(self.get_caller(), **self.parse())
        return self.render(collection, status_code=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return self.render(self.get_service().get_collection(self.get_caller(), pk))

    def update(self, request, pk=None):
        collection = self.get_service().update_collection(self.get_caller(), pk, **self.parse())
        return self.render(collection)

    def partial_update(self, request, pk=None):
        collection = self.get_service().update_collection(self.get_caller(), pk, **self.parse(partial=True))
        return self.render(collection)

    def destroy(self, request, pk=None):
        self.get_service().delete_collection(self.get_caller(), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def recipes(self, request, pk=None):
        recipes = self.get_service().recipes_in_collection(self.get_caller(), pk)
        return self.render(recipes, many=True, serializer_class=RecipeSerializer)


class TagViewSet(CatalogViewSet):
    input_serializer_class = TagInputSerializer
    output_serializer_class = TagSerializer

    def list(self, request):
        return self.render(self.get_service().list_tags(self.get_caller()), many=True)

    def create(self, request):
        tag = self.get_service().create_tag(self.get_caller(), **self.parse())
        return self.render(tag, status_code=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return self.render(self.get_service().get_tag(self.get_caller(), pk))

    def update(self, request, pk=None):
        tag = self.get_service().update_tag(self.get_caller(), pk, **self.parse())
        return self.render(tag)

    def partial_update(self, request, pk=None):
        tag = self.get_service().update_tag(self.get_caller(), pk, **self.parse(partial=True))
        return self.render(tag)

    def destroy(self, request, pk=None):
        self.get_service().delete_tag(self.get_caller(), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post', 'delete'], url_path=r'recipe/(?P<recipe_pk>[^/.]+)')
    def recipe(self, request, pk=None, recipe_pk=None):
        """Rattacher (POST) ou détacher (DELETE) le tag d'une recette"""
        service = self.get_service()

        if request.method == 'POST':
            result = service.tag_recipe(self.get_caller(), recipe_pk, pk)
            if result == AttachResult.ATTACHED:
                return Response({'message': 'Tag added to recipe successfully.', 'status': result.value})
            return Response({'message': 'Tag already added to recipe.', 'status': result.value})

        removed = service.untag_recipe(self.get_caller(), recipe_pk, pk)
        if removed:
            return Response({'message': 'Tag detached from recipe', 'status': 'detached'})
        return Response({'message': 'Tag was not attached to recipe', 'status': 'not_attached'})

    @action(detail=True, methods=['get'])
    def recipes(self, request, pk=None):
        recipes = self.get_service().recipes_by_tag(self.get_caller(), pk)
        return self.render(recipes, many=True, serializer_class=RecipeSerializer)
