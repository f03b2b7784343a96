"""
Modèle des ingrédients d'une recette et prédicat de contenance.

Une recette stocke ses ingrédients comme une liste ordonnée ; chaque élément
est soit une chaîne ("flour"), soit un objet {"name": "flour", "quantity": "100g"}.
La recherche est une correspondance exacte (sensible à la casse) sur l'élément
ou sur son nom : pas de normalisation, pas de fuzzy matching.
"""
from typing import Any, Iterable, List, Optional


def ingredient_name(item: Any) -> Optional[str]:
    """Nom d'un élément d'ingrédient, None si l'élément n'en a pas"""
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        name = item.get('name')
        return name if isinstance(name, str) else None
    return None


def normalize_search_term(term: Any) -> str:
    """
    Nettoie le terme recherché (espaces en bordure uniquement).
    Retourne une chaîne vide si le terme n'est pas exploitable.
    """
    if not isinstance(term, str):
        return ''
    return term.strip()


def ingredients_contain(ingredients: Optional[Iterable[Any]], term: str) -> bool:
    """True si un élément de la liste est égal au terme (ou porte ce nom)"""
    if not ingredients or not term:
        return False
    return any(ingredient_name(item) == term for item in ingredients)


def containment_lookups(term: str) -> List[Any]:
    """
    Valeurs à passer au lookup JSON `contains` pour pré-filtrer en base
    (une forme chaîne et une forme objet).
    """
    return [[term], [{'name': term}]]
