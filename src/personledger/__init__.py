"""personledger: Person record management over a ledger world state.

Usage:
    from personledger import LocalWorldState, PersonContract

    contract = PersonContract()
    state = LocalWorldState()

    contract.create(state, "Ada", 36, "passport", 7, "Main St")
    contract.update(state, 7, 37, "Elm St", True, False)
    employed = contract.get_employed(state, True)
"""

__version__ = "0.1.0"

# Configuration
from personledger.config import ContractSettings

# Contract
from personledger.contract import (
    EmptyResultError,
    InvalidIdentifierError,
    PersonContract,
    PersonContractError,
    RecordNotFoundError,
    SerializationError,
    StoreError,
)

# Core primitives
from personledger.core import (
    Operator,
    Person,
    PersonField,
    QueryResult,
    Selector,
)

# Storage
from personledger.storage import (
    KeyValue,
    LocalWorldState,
    StateIterator,
    WorldState,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Person",
    "PersonField",
    "QueryResult",
    "Selector",
    "Operator",
    # Contract
    "PersonContract",
    "PersonContractError",
    "RecordNotFoundError",
    "SerializationError",
    "EmptyResultError",
    "StoreError",
    "InvalidIdentifierError",
    # Storage
    "WorldState",
    "StateIterator",
    "KeyValue",
    "LocalWorldState",
    # Config
    "ContractSettings",
]
