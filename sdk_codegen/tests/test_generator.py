#!/usr/bin/env python3
"""
End-to-end generation tests for the Python and TypeScript targets.
"""

from pathlib import Path

import pytest

from sdk_codegen import __version__
from sdk_codegen.config import FormatterConfig, GeneratorConfig, Language
from sdk_codegen.document import Document
from sdk_codegen.fileops import CreateDirectory, WriteFile
from sdk_codegen.generator import SdkGenerator
from sdk_codegen.targets import PythonTarget, TypeScriptTarget

TEST_DATA = Path(__file__).parent / "test_data"


def billing_generator(**options):
    config = GeneratorConfig.from_dict(options)
    return SdkGenerator(Document.load(TEST_DATA / "billing_spec.yaml"), config)


def written_files(ops):
    return {str(op.path): op.content for op in ops if isinstance(op, WriteFile)}


@pytest.fixture(scope="module")
def python_files():
    return written_files(billing_generator().plan(Language.PYTHON, "python"))


@pytest.fixture(scope="module")
def typescript_files():
    return written_files(billing_generator().plan(Language.TYPESCRIPT, "typescript"))


class TestPythonTarget:
    def test_file_layout(self, python_files):
        assert sorted(python_files) == [
            "python/main.py",
            "python/models/__init__.py",
            "python/models/customer/__init__.py",
            "python/models/customer/operations.py",
            "python/models/customer/responses.py",
            "python/models/enums.py",
            "python/models/subscription/__init__.py",
            "python/models/subscription/operations.py",
            "python/models/subscription/responses.py",
        ]

    def test_directories_come_before_their_files(self):
        ops = billing_generator().plan(Language.PYTHON, "python")
        created = set()
        for op in ops:
            if isinstance(op, CreateDirectory):
                created.add(str(op.path))
            elif str(op.path.parent) != "python":
                assert str(op.path.parent) in created

    def test_generated_modules_compile(self, python_files):
        for name, content in python_files.items():
            compile(content, name, "exec")

    def test_shared_enums(self, python_files):
        enums = python_files["python/models/enums.py"]
        assert "class AutoCollection(Enum):" in enums
        assert "class Status(Enum):" in enums
        assert 'CANCELLED = "cancelled"' in enums

    def test_operations(self, python_files):
        operations = python_files["python/models/subscription/operations.py"]
        assert "class Subscription:" in operations
        assert "class SubscriptionItem(TypedDict):" in operations
        assert "class Coupon(TypedDict):" in operations
        assert "def cancel_for_items(" in operations
        assert "def add_charge(" not in operations
        assert "filters.StringFilter" in operations

    def test_local_enums_are_nested(self, python_files):
        operations = python_files["python/models/customer/operations.py"]
        assert "class BillingAddressValidationStatus(Enum):" in operations
        assert "Customer.BillingAddressValidationStatus" in operations
        assert "def sync(" not in operations

    def test_responses(self, python_files):
        responses = python_files["python/models/subscription/responses.py"]
        assert "class SubscriptionItemResponse(Model):" in responses
        assert "class SubscriptionResponse(Model):" in responses
        assert "enums.Status" in responses
        assert "from ..customer.responses import CustomerResponse" in responses
        assert "class ListSubscriptionResponse:" in responses

    def test_client_lists_every_resource(self, python_files):
        main = python_files["python/main.py"]
        assert "self.customer = Customer(self.env)" in main
        assert "self.subscription = Subscription(self.env)" in main
        assert "Media" not in main
        assert "Plan" not in main

    def test_generation_comment(self, python_files):
        first_line = python_files["python/main.py"].splitlines()[0]
        assert first_line == f"# Generated by sdk_codegen v{__version__} : sdk_codegen"

    def test_generation_comment_disabled(self):
        files = written_files(billing_generator(add_generation_comment=False).plan(Language.PYTHON, "python"))
        assert "Generated by" not in files["python/main.py"]

    def test_unformatted_output(self):
        generator = billing_generator()
        generator.config.formatter = FormatterConfig(enabled=False)
        files = written_files(generator.plan(Language.PYTHON, "python"))
        compile(files["python/models/customer/operations.py"], "operations.py", "exec")

    def test_plain_sort_by_is_a_list_parameter(self):
        operation = {
            "x-cb-operation-method-name": "list",
            "x-cb-resource-id": "note",
            "parameters": [
                {"name": "limit", "in": "query", "x-cb-is-pagination-parameter": True, "schema": {"type": "integer"}},
                {"name": "sort_by", "in": "query", "schema": {"type": "string"}},
            ],
        }
        document = Document(
            {
                "paths": {"/notes": {"get": operation}},
                "components": {
                    "schemas": {
                        "Note": {"type": "object", "x-cb-resource-id": "note", "properties": {"id": {"type": "string"}}}
                    }
                },
            }
        )
        files = written_files(SdkGenerator(document).plan(Language.PYTHON, "python"))
        operations = files["python/models/note/operations.py"]
        assert "limit: NotRequired[int]" in operations
        assert "sort_by: NotRequired[str]" in operations

    def test_package_name(self):
        files = written_files(billing_generator(python_package="billing").plan(Language.PYTHON, "python"))
        assert "from billing import environment" in files["python/main.py"]


class TestTypeScriptTarget:
    def test_file_layout(self, typescript_files):
        assert sorted(typescript_files) == [
            "typescript/core.d.ts",
            "typescript/index.d.ts",
            "typescript/resources/Customer.d.ts",
            "typescript/resources/Subscription.d.ts",
            "typescript/resources/filter.d.ts",
            "typescript/webhook/content.ts",
            "typescript/webhook/eventType.ts",
        ]

    def test_global_enum_types(self, typescript_files):
        core = typescript_files["typescript/core.d.ts"]
        assert "type StatusEnum = 'active' | 'cancelled';" in core
        assert "type AutoCollectionEnum = 'on' | 'off';" in core

    def test_resource_declarations(self, typescript_files):
        subscription = typescript_files["typescript/resources/Subscription.d.ts"]
        assert "status?: StatusEnum;" in subscription
        assert "subscription_item?: Subscription.SubscriptionItem;" in subscription
        assert "coupons?: Subscription.Coupon[];" in subscription
        assert "coupon_ids?: filter.StringFilter;" in subscription
        assert "subscription_items: SubscriptionItemsCancelForItemsInputParam[];" in subscription

    def test_sort_builder_type(self, typescript_files):
        customer = typescript_files["typescript/resources/Customer.d.ts"]
        assert "export interface CustomerListSortBy {" in customer
        assert "sort_by?: CustomerListSortBy;" in customer
        assert "retrieve(id: string, headers?: ApiHeaders): Promise<ApiResponse<RetrieveResponse>>;" in customer

    def test_filter_declarations(self, typescript_files):
        filters = typescript_files["typescript/resources/filter.d.ts"]
        for name in ("StringFilter", "NumberFilter", "TimestampFilter", "DateFilter", "BooleanFilter", "EnumFilter"):
            assert f"interface {name} {{" in filters

    def test_index(self, typescript_files):
        index = typescript_files["typescript/index.d.ts"]
        assert "customer: Customer.CustomerResource;" in index
        assert "///<reference path='./resources/Subscription.d.ts'/>" in index

    def test_webhook_event_types(self, typescript_files):
        event_type = typescript_files["typescript/webhook/eventType.ts"]
        assert event_type.count("CustomerCreated = 'customer_created',") == 1
        assert "CustomerMovedIn = 'customer_moved_in'," in event_type

    def test_webhook_content(self, typescript_files):
        content = typescript_files["typescript/webhook/content.ts"]
        assert "import type { Customer, Subscription } from 'api-client';" in content
        assert "export interface SubscriptionCreatedContent {" in content
        assert "Invoice" not in content

    def test_deprecated_webhooks_can_be_left_out(self):
        files = written_files(
            billing_generator(include_deprecated_webhooks=False).plan(Language.TYPESCRIPT, "typescript")
        )
        assert "customer_moved_in" not in files["typescript/webhook/eventType.ts"]

    def test_no_webhook_files_without_webhooks(self):
        document = Document({"info": {"title": "Empty"}})
        ops = SdkGenerator(document).plan(Language.TYPESCRIPT, "ts")
        assert CreateDirectory("ts", "webhook") in ops
        assert "ts/webhook/content.ts" not in written_files(ops)


class TestGenerator:
    def test_spec_is_built_once(self):
        generator = billing_generator()
        spec = generator.spec
        generator.generate([Language.PYTHON, Language.TYPESCRIPT])
        assert generator.spec is spec

    def test_generate_writes_each_language_to_its_directory(self, tmp_path):
        result = billing_generator().generate([Language.PYTHON, Language.TYPESCRIPT], tmp_path)

        assert result.ok
        assert (tmp_path / "python" / "models" / "enums.py").is_file()
        assert (tmp_path / "typescript" / "resources" / "Customer.d.ts").is_file()
        assert tmp_path / "python" / "main.py" in result.written

    def test_dry_run(self, tmp_path):
        result = billing_generator(output={"dry_run": True}).generate([Language.PYTHON], tmp_path)
        assert result.ok
        assert result.written
        assert list(tmp_path.iterdir()) == []

    def test_failing_target_does_not_stop_the_others(self, monkeypatch):
        monkeypatch.setattr(PythonTarget, "TEMPLATES", {**PythonTarget.TEMPLATES, "main": "missing.py.jinja2"})

        result = billing_generator().generate([Language.PYTHON, Language.TYPESCRIPT])

        assert not result.ok
        assert Language.PYTHON in result.failures
        assert "missing.py.jinja2" in result.failures[Language.PYTHON]
        assert Language.TYPESCRIPT in result.operations
        assert Language.PYTHON not in result.operations

    def test_qa_mode_generates_hidden_entries(self):
        files = written_files(billing_generator(qa_mode=True).plan(Language.PYTHON, "python"))
        assert "python/models/legacy_thing/operations.py" in files
        assert "def add_charge(" in files["python/models/subscription/operations.py"]

    def test_hidden_override_is_per_target(self):
        spec = billing_generator().spec
        assert "media" not in [r.id for r in PythonTarget().resources(spec)]
        assert "media" not in [r.id for r in TypeScriptTarget().resources(spec)]
        assert "business_entity_change" in PythonTarget.HIDDEN_OVERRIDE
        assert "business_entity_change" not in TypeScriptTarget.HIDDEN_OVERRIDE


if __name__ == "__main__":
    pytest.main([__file__])
