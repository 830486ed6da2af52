"""
Erreurs métier / Domain errors.
Les cas "introuvable" ne sont pas des exceptions : les services renvoient None / False.
"Not found" is not an exception: services return None / False.
"""


class CarCostError(Exception):
    """Erreur métier de base / Base domain error."""


class ValidationFailure(CarCostError):
    """Donnée refusée avant écriture / Input rejected before any write."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class LinkedExpenseError(ValidationFailure):
    """Dépense miroir d'un plein, modifiable via le plein seulement /
    Shadow expense of a fuel entry, only editable through that entry."""

    def __init__(self, expense_id: int, fuel_entry_id: int):
        super().__init__(
            "expense_id",
            f"Expense {expense_id} is linked to fuel entry {fuel_entry_id}; edit or delete the fuel entry instead",
        )
        self.expense_id = expense_id
        self.fuel_entry_id = fuel_entry_id


class OwnershipConflict(CarCostError):
    """Deux entités rattachées à des véhicules différents /
    Two referenced entities belong to different vehicles."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
