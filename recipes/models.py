from django.db import models

from .validators import validate_ingredients, validate_not_blank


class Chef(models.Model):
    """Chef, auteur de recettes"""
    name = models.CharField(max_length=255, validators=[validate_not_blank])
    profile = models.TextField(blank=True, null=True, help_text="Présentation libre du chef")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'chefs'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.name


class Recipe(models.Model):
    """Recette de cuisine"""
    name = models.CharField(max_length=255, validators=[validate_not_blank])
    unique_code = models.CharField(
        max_length=255,
        unique=True,
        validators=[validate_not_blank],
        help_text="Code unique de la recette, distinct de l'identifiant"
    )
    chef = models.ForeignKey(
        Chef,
        on_delete=models.PROTECT,
        related_name='recipes'
    )
    ingredients = models.JSONField(
        default=list,
        blank=True,
        validators=[validate_ingredients],
        help_text="Liste ordonnée de chaînes ou d'objets {name, quantity}"
    )
    likes_count = models.PositiveIntegerField(default=0)
    dislikes_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'recipes'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.name} ({self.unique_code})"


class Collection(models.Model):
    """Collection de recettes (appartenance, pas propriété)"""
    name = models.CharField(max_length=255, validators=[validate_not_blank])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Many-to-many avec Recipe via CollectionRecipe
    recipes = models.ManyToManyField(
        Recipe,
        through='CollectionRecipe',
        related_name='collections',
        blank=True
    )

    class Meta:
        db_table = 'collections'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.name


class CollectionRecipe(models.Model):
    """Relation many-to-many entre Collection et Recipe"""
    collection = models.ForeignKey(
        Collection,
        on_delete=models.CASCADE,
        related_name='collection_recipes'
    )
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name='collection_recipes'
    )

    class Meta:
        db_table = 'collection_recipe'
        constraints = [
            models.UniqueConstraint(
                fields=['collection', 'recipe'],
                name='uq_collection_recipe'
            ),
        ]

    def __str__(self):
        return f"{self.collection_id} - {self.recipe_id}"


class Tag(models.Model):
    """Étiquette (nom unique)"""
    name = models.CharField(max_length=255, unique=True, validators=[validate_not_blank])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Many-to-many avec Recipe via RecipeTag
    recipes = models.ManyToManyField(
        Recipe,
        through='RecipeTag',
        related_name='tags',
        blank=True
    )

    class Meta:
        db_table = 'tags'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.name


class RecipeTag(models.Model):
    """Relation many-to-many entre Recipe et Tag"""
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name='recipe_tags'
    )
    tag = models.ForeignKey(
        Tag,
        on_delete=models.CASCADE,
        related_name='recipe_tags'
    )

    class Meta:
        db_table = 'recipe_tag'
        constraints = [
            models.UniqueConstraint(
                fields=['recipe', 'tag'],
                name='uq_recipe_tag'
            ),
        ]

    def __str__(self):
        return f"{self.recipe_id} - {self.tag_id}"
