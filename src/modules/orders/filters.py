import django_filters

from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    room = django_filters.UUIDFilter(field_name="room_id")
    start_date = django_filters.DateFilter(
        field_name="requested_delivery_date", lookup_expr="gte"
    )
    end_date = django_filters.DateFilter(
        field_name="requested_delivery_date", lookup_expr="lte"
    )

    class Meta:
        model = Order
        fields = ["room", "start_date", "end_date"]
