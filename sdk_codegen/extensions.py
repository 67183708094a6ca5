"""
Vendor extension keys understood by the IR builder.
"""

# Operation extensions
OPERATION_METHOD_NAME = "x-cb-operation-method-name"
IS_OPERATION_LIST = "x-cb-operation-is-list"
IS_BULK_OPERATION = "x-cb-operation-is-bulk"
OPERATION_IS_BATCH = "x-cb-operation-is-batch"
IS_OPERATION_IDEMPOTENT = "x-cb-operation-is-idempotent"
OPERATION_SUB_DOMAIN = "x-cb-operation-sub-domain-name"
BATCH_OPERATION_PATH_ID = "x-cb-batch-operation-path-id"
IS_OPERATION_NEEDS_JSON_INPUT = "x-cb-is-operation-needs-json-input"
IS_OPERATION_NEEDS_INPUT_OBJECT = "x-cb-is-operation-needs-input-object"
IS_CUSTOM_FIELDS_SUPPORTED = "x-cb-is-custom-fields-supported"
IS_CONSENT_FIELDS_SUPPORTED = "x-cb-is-consent-fields-supported"
SORT_ORDER = "x-cb-sort-order"

# Parameter extensions
IS_FILTER_PARAMETER = "x-cb-is-filter-parameter"
IS_SUB_RESOURCE = "x-cb-is-sub-resource"
IS_PAGINATION_PARAMETER = "x-cb-is-pagination-parameter"
IS_PARAMETER_BLANK_OPTION = "x-cb-parameter-blank-option"
IS_PRESENCE_OPERATOR_SUPPORTED = "x-cb-is-presence-operator-supported"
SDK_FILTER_NAME = "x-cb-sdk-filter-name"

# Schema extensions
IS_MONEY_COLUMN = "x-cb-is-money-column"
IS_LONG_MONEY_COLUMN = "x-cb-is-long-money-column"
IS_GLOBAL_ENUM = "x-cb-is-global-enum"
GLOBAL_ENUM_REFERENCE = "x-cb-global-enum-reference"
IS_EXTERNAL_ENUM = "x-cb-is-external-enum"
SDK_ENUM_API_NAME = "x-cb-sdk-enum-api-name"
DEPRECATED_ENUM_VALUES = "x-cb-deprecated-enum-values"
META_MODEL_NAME = "x-cb-meta-model-name"
IS_API_COLUMN = "x-cb-is-api-column"
IS_FOREIGN_KEY_COLUMN = "x-cb-is-foreign-column"
IS_MULTI_ATTRIBUTE = "x-cb-is-multi-value-attribute"
IS_DEPENDENT_ATTRIBUTE = "x-cb-is-dependent-attribute"
IS_COMPOSITE_ARRAY_REQUEST_BODY = "x-cb-is-composite-array-request-body"
DEPRECATION_MESSAGE = "x-cb-deprecation-message"

# Resource extensions
RESOURCE_ID = "x-cb-resource-id"
RESOURCE_PATH_NAME = "x-cb-resource-path-name"
IS_GLOBAL_RESOURCE_REFERENCE = "x-cb-is-global-resource-reference"
IS_THIRD_PARTY_RESOURCE = "x-cb-is-third-party-resource"
IS_DEPENDENT_RESOURCE = "x-cb-is-dependent-resource"
SUB_RESOURCE_NAME = "x-cb-sub-resource-name"
SUB_RESOURCE_PARENT_NAME = "x-cb-sub-resource-parent-name"

# Versioning and visibility
API_VERSION = "x-cb-api-version"
PRODUCT_CATALOG_VERSION = "x-cb-product-catalog-version"
HIDDEN_FROM_CLIENT_SDK = "x-cb-hidden-from-client-sdk"
IS_INTERNAL = "x-cb-internal"
MODULE = "x-cb-module"
IS_GEN_SEPARATE = "x-cb-is-gen-separate"
