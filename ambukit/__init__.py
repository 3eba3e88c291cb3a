"""AmbuKit authorization core.

Role-based authorization engine for the AmbuKit ambulance kit inventory:
role registry and policy store access, a policy cache, and the decision
engine that gates every (actor, action, entity) triple.
"""

__version__ = "0.1.0"
