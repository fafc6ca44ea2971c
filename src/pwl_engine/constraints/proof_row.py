"""
Proof rows for ReLU constraints.

With aux = f - b and the tableau's own slack s for aux, every exact
bound consequence of a ReLU follows from the single row

    f = b + aux + s

so one row per constraint instance justifies all of them.
"""

from ..core.tableau_row import TableauRow, TableauRowEntry


def build_relu_tightening_row(f: int, b: int, aux: int, tableau_aux: int) -> TableauRow:
    """
    Build the justification row f = b + aux + tableau_aux.

    Args:
        f: ReLU output variable
        b: ReLU input variable
        aux: The constraint's slack variable (aux = f - b)
        tableau_aux: Slack allocated by the tableau for aux's equation

    Returns:
        TableauRow with lhs f and zero scalar
    """
    return TableauRow(
        lhs=f,
        row=[
            TableauRowEntry(b, 1.0),
            TableauRowEntry(aux, 1.0),
            TableauRowEntry(tableau_aux, 1.0),
        ],
        scalar=0.0
    )
