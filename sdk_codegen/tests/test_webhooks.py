#!/usr/bin/env python3
"""
Tests for webhook event resolution.
"""

from pathlib import Path

import pytest

from sdk_codegen.document import Document
from sdk_codegen.ir import Attribute, Resource, TypeKind, TypeRef, WebhookInfo, build_spec
from sdk_codegen.webhooks import EventResource, WebhookResolver

TEST_DATA = Path(__file__).parent / "test_data"


def customer_event():
    content = Attribute(
        "content",
        TypeRef(TypeKind.OBJECT, name="Content"),
        attributes=(Attribute("customer", TypeRef(TypeKind.REFERENCE, name="Customer")),),
    )
    return Resource(name="Customer", id="", attributes=(content,))


def resolver(*event_resources, known=("Customer", "Subscription")):
    return WebhookResolver(event_resources, lambda name: name in known)


class TestWebhookResolver:
    def test_duplicate_event_types_resolve_once(self):
        infos = [WebhookInfo("customer_created", "Customer"), WebhookInfo("customer_created", "Customer")]
        resolution = resolver(customer_event()).resolve(infos)
        assert [e.event_type for e in resolution.events] == ["customer_created"]
        assert resolution.events[0].resources == (EventResource("Customer"),)
        assert resolution.imports == ("Customer",)

    def test_first_entry_wins(self):
        infos = [WebhookInfo("customer_created", None), WebhookInfo("customer_created", "Customer")]
        (event,) = resolver(customer_event()).resolve(infos).events
        assert event.resources == ()

    def test_events_are_sorted_by_type(self):
        infos = [WebhookInfo(t, "Customer") for t in ("subscription_created", "customer_created", "card_added")]
        resolution = resolver(customer_event()).resolve(infos)
        assert [e.event_type for e in resolution.events] == ["card_added", "customer_created", "subscription_created"]
        assert resolution.imports == ("Customer",)

    def test_unknown_schema_has_no_resources(self):
        assert resolver(customer_event()).resources_of("Nope") == ()
        assert resolver(customer_event()).resources_of(None) == ()

    def test_event_without_content(self):
        bare = Resource(name="Ping", id="", attributes=(Attribute("id", TypeRef(TypeKind.STRING)),))
        assert resolver(bare).resources_of("Ping") == ()

    def test_models_the_target_does_not_generate_are_skipped(self):
        assert resolver(customer_event(), known=()).resources_of("Customer") == ()


class TestWebhooksFromDocument:
    def test_billing_events(self):
        spec = build_spec(Document.load(TEST_DATA / "billing_spec.yaml"))
        known = {r.name for r in spec.resources}
        resolution = WebhookResolver(spec.event_resources, lambda name: name in known).resolve(
            spec.webhook_info(include_deprecated=True)
        )

        assert [e.event_type for e in resolution.events] == [
            "customer_created",
            "customer_moved_in",
            "subscription_created",
        ]
        subscription_created = resolution.events[2]
        # Invoice has no model, so only the two known resources remain
        assert subscription_created.resources == (EventResource("Subscription"), EventResource("Customer"))
        assert resolution.imports == ("Customer", "Subscription")

    def test_array_references(self):
        spec = build_spec(Document.load(TEST_DATA / "billing_spec.yaml"))
        resources = WebhookResolver(spec.event_resources, lambda name: True).resources_of("SubscriptionCreatedEvent")
        assert EventResource("Invoice", is_array=True) in resources


if __name__ == "__main__":
    pytest.main([__file__])
