#!/usr/bin/env python3
"""
Tests for the derived parameter and response views.
"""

from pathlib import Path

import pytest

from sdk_codegen.document import Document
from sdk_codegen.ir import (
    Action,
    ActionResponse,
    Attribute,
    FilterKind,
    OperationResponse,
    Parameter,
    ParameterLocation,
    TypeKind,
    TypeRef,
    build_spec,
)
from sdk_codegen.views import ActionView, ResourceView, ResponseView, ViewOptions, required_first

TEST_DATA = Path(__file__).parent / "test_data"


def billing_spec():
    return build_spec(Document.load(TEST_DATA / "billing_spec.yaml"))


def find_action(spec, resource_name, action_name):
    resource = spec.resource(resource_name)
    return next(a for a in resource.actions if a.name == action_name)


def pagination_only_action():
    page = [
        Parameter(
            Attribute(name, TypeRef(TypeKind.INTEGER), is_pagination=True),
            ParameterLocation.QUERY,
        )
        for name in ("limit", "offset")
    ]
    return Action(id="list_notes", name="list", resource_id="note", http_method="GET", url="/notes",
                  query_parameters=tuple(page))


class TestFilterParameters:
    def test_array_of_string_filter_is_a_list_string_filter(self):
        view = ActionView(find_action(billing_spec(), "Subscription", "list"), "Subscription")
        coupon_ids = next(f for f in view.filter_parameters if f.name == "coupon_ids")
        assert coupon_ids.kind is FilterKind.STRING
        assert coupon_ids.is_list
        assert coupon_ids.type_name == "StringFilter"

    def test_filter_kinds(self):
        view = ActionView(find_action(billing_spec(), "Subscription", "list"), "Subscription")
        assert [(f.name, f.kind) for f in view.filter_parameters] == [
            ("coupon_ids", FilterKind.STRING),
            ("status", FilterKind.ENUM),
            ("deleted", FilterKind.BOOLEAN),
        ]
        assert view.filter_kinds == (FilterKind.BOOLEAN, FilterKind.ENUM, FilterKind.STRING)

    def test_filters_are_not_scalars(self):
        view = ActionView(find_action(billing_spec(), "Customer", "list"), "Customer")
        assert [a.name for a in view.scalar_parameters] == ["limit", "offset"]
        assert [(f.name, f.kind) for f in view.filter_parameters] == [
            ("first_name", FilterKind.STRING),
            ("created_at", FilterKind.TIMESTAMP),
        ]

    def test_nested_filters_keep_their_group(self):
        child = Attribute("id", TypeRef(TypeKind.STRING), is_filter=True, filter_kind=FilterKind.STRING)
        parent = Attribute("customer", TypeRef(TypeKind.OBJECT), is_filter=True, attributes=(child,))
        action = Action(
            id="list_orders",
            name="list",
            resource_id="order",
            http_method="GET",
            url="/orders",
            query_parameters=(Parameter(parent, ParameterLocation.QUERY),),
        )
        (nested,) = ActionView(action, "Order").filter_parameters
        assert nested.name == "id"
        assert nested.group == "customer"


class TestPagination:
    def test_pagination_kept_by_default(self):
        view = ActionView(find_action(billing_spec(), "Customer", "list"), "Customer")
        assert [a.name for a in view.all_attributes][:2] == ["limit", "offset"]

    def test_pagination_dropped_when_excluded(self):
        options = ViewOptions(include_pagination=False)
        view = ActionView(find_action(billing_spec(), "Customer", "list"), "Customer", options)
        assert "limit" not in [a.name for a in view.all_attributes]
        assert "first_name" in [a.name for a in view.all_attributes]

    def test_pagination_only_action(self):
        action = pagination_only_action()
        assert [a.name for a in ActionView(action, "Note").all_attributes] == ["limit", "offset"]

        options = ViewOptions(accept_only_pagination=False)
        view = ActionView(action, "Note", options)
        assert view.all_attributes == ()
        assert not view.has_input


class TestSubParameters:
    def test_singular_group(self):
        view = ActionView(find_action(billing_spec(), "Customer", "create"), "Customer")
        (group,) = view.singular_sub_parameters
        assert group.name == "billing_address"
        assert group.key == "billing_address_create"
        assert [f.name for f in group.fields] == ["first_name", "validation_status"]
        assert [a.name for a in view.scalar_parameters] == ["id", "first_name", "auto_collection"]

    def test_composite_array_group(self):
        view = ActionView(find_action(billing_spec(), "Subscription", "cancelForItems"), "Subscription")
        (group,) = view.multi_sub_parameters
        assert group.name == "subscription_items"
        assert group.is_list
        assert group.required
        assert [a.name for a in view.scalar_parameters] == ["end_of_term", "meta_data"]

    def test_sort_group(self):
        view = ActionView(find_action(billing_spec(), "Customer", "list"), "Customer")
        (sort,) = view.multi_sub_parameters
        assert sort.name == "sort_by"
        assert not sort.is_list
        assert [f.name for f in sort.fields] == ["asc", "desc"]
        assert view.sort_type_name == "CustomerListSortBy"

    def test_sort_group_disabled(self):
        options = ViewOptions(include_sort_by=False)
        view = ActionView(find_action(billing_spec(), "Customer", "list"), "Customer", options)
        assert view.multi_sub_parameters == ()
        assert [a.name for a in view.sort_parameters] == ["sort_by"]

    def test_params_class_name(self):
        view = ActionView(find_action(billing_spec(), "Subscription", "cancelForItems"), "Subscription")
        assert view.params_class_name == "CancelForItemsParams"


class TestResponses:
    def test_required_first_is_stable(self):
        responses = [
            OperationResponse("a", TypeRef(TypeKind.STRING), required=False),
            OperationResponse("b", TypeRef(TypeKind.STRING), required=True),
            OperationResponse("c", TypeRef(TypeKind.STRING), required=False),
            OperationResponse("d", TypeRef(TypeKind.STRING), required=True),
        ]
        assert [r.name for r in required_first(responses)] == ["b", "d", "a", "c"]

    def test_required_first_keeps_order_of_equals(self):
        responses = [OperationResponse(name, TypeRef(TypeKind.STRING), required=True) for name in "xyz"]
        assert [r.name for r in required_first(responses)] == ["x", "y", "z"]

    def test_action_responses_are_sorted(self):
        response = ActionResponse(
            "CancelResponse",
            parameters=(
                OperationResponse("customer", TypeRef(TypeKind.REFERENCE, name="Customer"), "Customer"),
                OperationResponse("subscription", TypeRef(TypeKind.REFERENCE, name="Subscription"), "Subscription",
                                  required=True),
            ),
        )
        action = Action(id="cancel", name="cancel", resource_id="subscription", http_method="POST",
                        url="/subscriptions/{id}/cancel", response=response)
        view = ResponseView(action, "Subscription")
        assert [r.name for r in view.responses] == ["subscription", "customer"]
        assert view.sub_response_class_name is None

    def test_list_response_classes(self):
        view = ResponseView(find_action(billing_spec(), "Customer", "list"), "Customer")
        assert view.class_name == "ListResponse"
        assert view.sub_response_class_name == "ListCustomerResponse"
        assert [r.name for r in view.sub_responses] == ["customer"]


class TestResourceView:
    def test_enums_include_sub_resource_enums(self):
        view = ResourceView(billing_spec().resource("Customer"))
        assert [e.name for e in view.enums] == ["billing_address_validation_status"]
        assert view.enums[0].values == ("not_validated", "valid", "invalid")

    def test_global_enum_names(self):
        spec = billing_spec()
        assert ResourceView(spec.resource("Customer")).global_enum_names == ("AutoCollection",)
        assert ResourceView(spec.resource("Subscription")).global_enum_names == ("Status",)


if __name__ == "__main__":
    pytest.main([__file__])
