from rest_framework import serializers


# ========== Entrée : champs attendus dans le corps des requêtes ==========

class ChefInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    profile = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)


class RecipeInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    unique_code = serializers.CharField(max_length=255)
    chef_id = serializers.IntegerField()
    ingredients = serializers.ListField(
        child=serializers.JSONField(),
        required=False,
        help_text="Chaînes ou objets {name, quantity}"
    )


class CollectionInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)


class TagInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)


class AddToCollectionSerializer(serializers.Serializer):
    collection_id = serializers.IntegerField()


class IngredientSearchSerializer(serializers.Serializer):
    ingredient = serializers.CharField(max_length=255)


# ========== Sortie : lecture des valeurs renvoyées par le service ==========

class ChefSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    profile = serializers.CharField(read_only=True, allow_null=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class CollectionSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class TagSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class RecipeSerializer(serializers.Serializer):
    """Recette sans relations"""
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    unique_code = serializers.CharField(read_only=True)
    chef_id = serializers.IntegerField(read_only=True)
    ingredients = serializers.JSONField(read_only=True)
    likes_count = serializers.IntegerField(read_only=True)
    dislikes_count = serializers.IntegerField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)


class RecipeDetailSerializer(RecipeSerializer):
    """Recette avec chef, collections et tags"""
    chef = ChefSerializer(read_only=True)
    collections = CollectionSerializer(many=True, read_only=True)
    tags = TagSerializer(many=True, read_only=True)
