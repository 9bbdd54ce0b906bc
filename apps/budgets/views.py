"""
Budget views.

Views are thin — all business logic is in the service layer.
"""

from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.budgets.models import Budget
from apps.budgets.serializers import (
    BudgetResponseSerializer,
    BudgetSerializer,
    BudgetSpendSerializer,
)
from apps.budgets.services import BudgetService
from apps.core.utils import error_payload


def _budget_response_data(budget: Budget) -> dict:
    response_data = {
        'id': budget.pk,
        'category': budget.category,
        'amount': budget.amount,
        'description': budget.description,
        'period': budget.period,
        'start_date': budget.start_date,
        'spent': budget.spent,
        'remaining_amount': budget.remaining_amount,
        'usage_percentage': budget.usage_percentage,
        'is_over_budget': budget.is_over_budget,
    }

    serializer = BudgetResponseSerializer(data=response_data)
    serializer.is_valid(raise_exception=True)
    return serializer.data


class BudgetPagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


class BudgetListView(APIView):
    """
    GET /api/budgets
    POST /api/budgets

    List budgets (optionally ?period=daily|weekly|monthly|yearly),
    or set up a new one.
    """

    def get(self, request):
        period = request.query_params.get('period')
        if period and period not in Budget.Period.values:
            return Response(
                error_payload(status.HTTP_400_BAD_REQUEST, {
                    'period': [
                        f"Must be one of {', '.join(Budget.Period.values)}."
                    ],
                }),
                status=status.HTTP_400_BAD_REQUEST,
            )

        paginator = BudgetPagination()
        page = paginator.paginate_queryset(
            BudgetService.list_budgets(period=period), request, view=self,
        )
        return paginator.get_paginated_response(
            [_budget_response_data(budget) for budget in page]
        )

    def post(self, request):
        serializer = BudgetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        budget = BudgetService.create(serializer.validated_data)

        return Response(
            _budget_response_data(budget),
            status=status.HTTP_201_CREATED,
        )


class BudgetDetailView(APIView):
    """
    GET /api/budgets/<budget_id>
    PUT /api/budgets/<budget_id>
    DELETE /api/budgets/<budget_id>
    """

    def get(self, request, budget_id):
        budget = BudgetService.get_budget(budget_id)
        return Response(_budget_response_data(budget), status=status.HTTP_200_OK)

    def put(self, request, budget_id):
        serializer = BudgetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        budget = BudgetService.update(budget_id, serializer.validated_data)

        return Response(_budget_response_data(budget), status=status.HTTP_200_OK)

    def delete(self, request, budget_id):
        BudgetService.delete(budget_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class BudgetSpendView(APIView):
    """
    POST /api/budgets/<budget_id>/spend

    Record spending (or, with a negative amount, a refund) against a budget.
    """

    def post(self, request, budget_id):
        serializer = BudgetSpendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        budget = BudgetService.add_spent(
            budget_id, serializer.validated_data['amount'],
        )

        return Response(_budget_response_data(budget), status=status.HTTP_200_OK)
