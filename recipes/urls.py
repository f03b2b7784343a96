from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import ChefViewSet, CollectionViewSet, RecipeViewSet, TagViewSet

router = DefaultRouter()
router.register(r'chefs', ChefViewSet, basename='chef')
router.register(r'recipes', RecipeViewSet, basename='recipe')
router.register(r'collections', CollectionViewSet, basename='collection')
router.register(r'tags', TagViewSet, basename='tag')

urlpatterns = [
    path('', include(router.urls)),
]
