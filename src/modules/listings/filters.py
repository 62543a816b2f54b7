import django_filters

from modules.listings.constants import SORT_ORDERING, ListingSort, ListingStatus
from modules.listings.models import Listing


class ListingFilter(django_filters.FilterSet):
    """Public catalogue filters.

    Without ``seller`` only active listings are returned; with ``seller``
    every status of that seller is visible so they can manage stock.
    """

    category = django_filters.UUIDFilter(field_name="category_id")
    seller = django_filters.UUIDFilter(field_name="seller_id")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    search = django_filters.CharFilter(method="filter_search")
    sort = django_filters.ChoiceFilter(
        choices=ListingSort.choices, method="filter_sort", empty_label=None
    )

    class Meta:
        model = Listing
        fields = ["category", "seller", "min_price", "max_price", "search", "sort"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        return queryset.filter(title__icontains=value) if value else queryset

    def filter_sort(self, queryset, name, value):
        return queryset.order_by(*SORT_ORDERING[value])

    def filter_queryset(self, queryset):
        if not self.form.cleaned_data.get("seller"):
            queryset = queryset.filter(status=ListingStatus.ACTIVE)
        if not self.form.cleaned_data.get("sort"):
            queryset = queryset.order_by(*SORT_ORDERING[ListingSort.NEWEST])
        return super().filter_queryset(queryset)
