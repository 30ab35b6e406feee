"""Result types for railway-oriented programming.

Every transport operation returns a Result instead of raising: a logical
call either produced a value or a classified PayrixError, and callers branch
on the variant explicitly.

Usage:
    result = await transport.get_one(Customer, customer_id)
    match result:
        case Success(value=None):
            print("no such customer")
        case Success(value=customer):
            print(customer.email)
        case Failure(error=error):
            print(error.code, error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome of a logical operation.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome of a logical operation.

    Attributes:
        error: The classified error.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
