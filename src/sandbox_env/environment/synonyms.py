"""Variable names that consumers treat as interchangeable.

Tools inside the sandbox read either ``GITHUB_TOKEN`` or ``GH_TOKEN``, so
whenever one of them is known both must be set to the same value.
"""

from typing import MutableMapping, Sequence, Tuple

SynonymGroup = Tuple[str, ...]

GITHUB_TOKEN_GROUP: SynonymGroup = ("GITHUB_TOKEN", "GH_TOKEN")

DEFAULT_SYNONYM_GROUPS: Tuple[SynonymGroup, ...] = (GITHUB_TOKEN_GROUP,)


def normalize_synonyms(
    env: MutableMapping[str, str],
    groups: Sequence[SynonymGroup] = DEFAULT_SYNONYM_GROUPS,
) -> None:
    """Make every member of each group carry the same value, in place.

    The first member of a group (declared order) holding a non-empty value
    is canonical; its value is copied to the other members. Groups with no
    non-empty member are left untouched.
    """
    for group in groups:
        canonical = next((env[name] for name in group if env.get(name)), None)
        if canonical is None:
            continue
        for name in group:
            env[name] = canonical
