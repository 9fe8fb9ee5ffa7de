"""
Customer domain mappers.
Handles transformation between ORM models and DTOs for customer entities.
"""

from typing import Optional
from domain.models import Customer
from domain.schemas.customer_schemas import CustomerDetailResponse


class CustomerMapper:
    """Mapper for customer-related transformations."""

    @staticmethod
    def to_detail(
        customer: Customer,
        latest_weight: Optional[float],
        days_remaining: Optional[int],
    ) -> CustomerDetailResponse:
        """
        Convert a Customer ORM model to CustomerDetailResponse DTO.

        Args:
            customer: Customer ORM instance with its profile loaded
            latest_weight: weight of the newest check-in that recorded one
            days_remaining: whole days left on the subscription

        Returns:
            CustomerDetailResponse DTO
        """
        response = CustomerDetailResponse.model_validate(customer)
        return response.model_copy(
            update={"latest_weight": latest_weight, "days_remaining": days_remaining}
        )
