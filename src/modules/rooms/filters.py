import django_filters

from modules.rooms.models import Room


class RoomFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    class Meta:
        model = Room
        fields = ["name"]
