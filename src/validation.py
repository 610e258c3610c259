"""Data anomaly report for relationship graphs."""

from graph import RelationshipGraph


def validate_graph(graph: RelationshipGraph) -> list[str]:
    """
    Report relationship data the layout engine will degrade around:
    - References to ids with no person record (ignored during layout)
    - People listed as their own parent or spouse
    - Spouse relations recorded on one side only (the reverse is derived)

    Never raises; genealogical plausibility (cycles, ages) is not checked.

    Returns a list of warning messages.
    """
    warnings: list[str] = []
    G = graph.to_networkx()

    # Nodes created implicitly by an edge have no person attributes
    dangling = {n for n, data in G.nodes(data=True) if "person_name" not in data}

    for u, v, data in G.edges(data=True):
        rel = data.get("relationship_type")

        if u == v:
            role = "parent" if rel == "PARENT_OF" else "spouse"
            warnings.append(f"{G.nodes[u].get('person_name')} ({u}) is listed as their own {role}")
            continue

        if rel == "PARENT_OF" and u in dangling:
            child_name = G.nodes[v].get("person_name")
            warnings.append(f"{child_name} ({v}) references missing parent {u}")
        elif rel == "SPOUSE_OF":
            name = G.nodes[u].get("person_name")
            if v in dangling:
                warnings.append(f"{name} ({u}) references missing spouse {v}")
            elif G.get_edge_data(v, u, default={}).get("relationship_type") != "SPOUSE_OF":
                warnings.append(
                    f"Spouse {G.nodes[v].get('person_name')} ({v}) of {name} ({u}) "
                    "is recorded on one side only"
                )

    return warnings
