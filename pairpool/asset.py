"""
Asset identifiers and the transfer instructions they produce.

An asset is either a native currency denomination or a tokenized asset
living in an external token contract. The pricing math never looks inside an
asset; it only asks the asset to describe how an amount should be moved.
"""
from dataclasses import dataclass, asdict
from typing import Optional, Union

from pairpool.errors import ValidationError


# =============================================================================
# TRANSFER INSTRUCTIONS
# =============================================================================

@dataclass(frozen=True)
class BankSend:
    """Send native funds held by the pool to an address."""
    to_address: str
    denom: str
    amount: int

    def to_dict(self) -> dict:
        return {'bank_send': asdict(self)}


@dataclass(frozen=True)
class Transfer:
    """Ask a token contract to move tokens held by the pool to a recipient."""
    contract_address: str
    recipient: str
    amount: int

    def to_dict(self) -> dict:
        return {'transfer': asdict(self)}


@dataclass(frozen=True)
class TransferFrom:
    """Ask a token contract to move an owner's approved tokens to a recipient."""
    contract_address: str
    owner: str
    recipient: str
    amount: int

    def to_dict(self) -> dict:
        return {'transfer_from': asdict(self)}


TransferInstruction = Union[BankSend, Transfer, TransferFrom]


# =============================================================================
# ASSETS
# =============================================================================

@dataclass(frozen=True)
class Native:
    """Native currency, identified by its denomination."""
    denom: str

    def transfer(self, recipient: str, amount: int) -> BankSend:
        return BankSend(to_address=recipient, denom=self.denom, amount=amount)

    def transfer_from(self, owner: str, recipient: str, amount: int) -> Optional[TransferInstruction]:
        # Native funds arrive with the request itself; nothing to pull.
        return None

    def to_dict(self) -> dict:
        return {'native': self.denom}

    def __str__(self) -> str:
        return self.denom


@dataclass(frozen=True)
class Tokenized:
    """Asset managed by an external token contract."""
    contract_address: str

    def transfer(self, recipient: str, amount: int) -> Transfer:
        return Transfer(
            contract_address=self.contract_address,
            recipient=recipient,
            amount=amount,
        )

    def transfer_from(self, owner: str, recipient: str, amount: int) -> Optional[TransferInstruction]:
        return TransferFrom(
            contract_address=self.contract_address,
            owner=owner,
            recipient=recipient,
            amount=amount,
        )

    def to_dict(self) -> dict:
        return {'tokenized': self.contract_address}

    def __str__(self) -> str:
        return self.contract_address


Asset = Union[Native, Tokenized]


def asset_from_dict(data: dict) -> Asset:
    """
    Rebuild an asset from its stored form.

    Accepts ``{'native': denom}`` or ``{'tokenized': contract_address}``.
    """
    if not isinstance(data, dict) or len(data) != 1:
        raise ValidationError(f"Invalid asset descriptor: {data!r}")

    kind, value = next(iter(data.items()))
    if not isinstance(value, str) or not value:
        raise ValidationError(f"Invalid asset identifier for {kind}: {value!r}")

    if kind == 'native':
        return Native(value)
    elif kind == 'tokenized':
        return Tokenized(value)
    else:
        raise ValidationError(f"Unknown asset kind: {kind}")
