from django.core.exceptions import ValidationError

from .services.ingredient_matcher import ingredient_name


def validate_not_blank(value):
    """Refuser les chaînes vides ou composées uniquement d'espaces"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError('Ce champ ne peut pas être vide.', code='blank')


def validate_ingredients(value):
    """
    Les ingrédients sont une liste ordonnée dont chaque élément est soit
    une chaîne, soit un objet {"name": ..., "quantity": ...}.
    """
    if not isinstance(value, (list, tuple)):
        raise ValidationError('Les ingrédients doivent être une liste.', code='invalid')

    for index, item in enumerate(value):
        if isinstance(item, dict):
            extra = set(item) - {'name', 'quantity'}
            if extra:
                raise ValidationError(
                    f"Ingrédient #{index} : clés inattendues {sorted(extra)}.",
                    code='invalid',
                )
            quantity = item.get('quantity')
            if quantity is not None and not isinstance(quantity, (str, int, float)):
                raise ValidationError(
                    f"Ingrédient #{index} : quantité invalide.", code='invalid'
                )
        elif not isinstance(item, str):
            raise ValidationError(
                f"Ingrédient #{index} : chaîne ou objet attendu.", code='invalid'
            )

        name = ingredient_name(item)
        if not name or not name.strip():
            raise ValidationError(f"Ingrédient #{index} : nom vide.", code='blank')
