from rest_framework import serializers


def camelize(name):
    """total_spend -> totalSpend"""
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


class CamelCaseFieldsMixin:
    """Expose snake_case serializer fields under camelCase keys.

    The field keeps reading/writing its snake_case attribute through
    ``source``, so validated_data stays pythonic while the JSON the
    frontend sends and receives uses camelCase.
    """

    def get_fields(self):
        fields = super().get_fields()
        renamed = {}
        for name, field in fields.items():
            key = camelize(name)
            if key != name and field.source is None:
                field.source = name
            renamed[key] = field
        return renamed


def flatten_errors(detail):
    """Collect every message of a DRF error structure, in order, once."""
    messages = []

    def walk(node):
        if isinstance(node, dict):
            for value in node.values():
                walk(value)
        elif isinstance(node, (list, tuple)):
            for value in node:
                walk(value)
        elif node:
            message = str(node)
            if message not in messages:
                messages.append(message)

    walk(detail)
    return messages


class StrictCharField(serializers.CharField):
    """CharField that refuses numbers instead of casting them to text."""

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail('invalid')
        return super().to_internal_value(data)
