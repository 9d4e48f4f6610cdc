import django_filters

from modules.options.models import Option


class OptionFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    class Meta:
        model = Option
        fields = ["name"]
