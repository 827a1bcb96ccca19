"""
Server-declared parameters and the cache invalidation policy.
"""

from collections import namedtuple

from .crypto import secure_equals

ServerParameters = namedtuple('ServerParameters', ['strength', 'salt', 'iterations'])

ParameterChanges = namedtuple('ParameterChanges', ['needs_key_derivation', 'needs_group_reselect'])


def compare_parameters(old, new):
    """
    Decide what must be recomputed when the server sends new parameters.

    Salt or iteration changes invalidate the salted password. A strength
    change invalidates the digest and group context. The two are independent.

    Args:
        old: Previously cached ServerParameters, or None
        new: ServerParameters just received

    Returns:
        ParameterChanges
    """
    if old is None:
        return ParameterChanges(True, True)

    needs_key_derivation = (
        old.iterations != new.iterations
        or not secure_equals(old.salt, new.salt)
    )
    needs_group_reselect = old.strength != new.strength
    return ParameterChanges(needs_key_derivation, needs_group_reselect)
