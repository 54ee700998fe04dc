"""Canned field mapping suggestions and table mappings."""


CUSTOMER_MAPPINGS = [
    {
        "id": "map-1",
        "source_table_id": "customers",
        "source_column_id": "customer_id",
        "target_table_id": "dim_customer",
        "target_column_id": "customer_key",
        "transformation_type": "direct",
        "confidence": 98,
        "description": "Direct mapping of primary key",
    },
    {
        "id": "map-2",
        "source_table_id": "customers",
        "source_column_id": "email",
        "target_table_id": "dim_customer",
        "target_column_id": "email_address",
        "transformation_type": "direct",
        "confidence": 95,
        "description": "Email field with minor name difference",
    },
    {
        "id": "map-3",
        "source_table_id": "customers",
        "source_column_id": "first_name",
        "target_table_id": "dim_customer",
        "target_column_id": "full_name",
        "transformation_type": "concatenated",
        "confidence": 85,
        "formula": "CONCAT(first_name, ' ', last_name)",
        "description": "Composite field: first_name + last_name -> full_name",
    },
    {
        "id": "map-4",
        "source_table_id": "customers",
        "source_column_id": "created_at",
        "target_table_id": "dim_customer",
        "target_column_id": "registration_date",
        "transformation_type": "cast",
        "confidence": 92,
        "formula": "DATE(created_at)",
        "description": "Convert timestamp to date",
    },
    {
        "id": "map-5",
        "source_table_id": "customers",
        "source_column_id": "is_active",
        "target_table_id": "dim_customer",
        "target_column_id": "customer_status",
        "transformation_type": "case_when",
        "confidence": 78,
        "formula": "CASE WHEN is_active = true THEN 'Active' ELSE 'Inactive' END",
        "description": "Convert boolean to status string",
    },
]

ORDER_MAPPINGS = [
    {
        "id": "map-6",
        "source_table_id": "orders",
        "source_column_id": "order_id",
        "target_table_id": "fact_order",
        "target_column_id": "order_key",
        "transformation_type": "direct",
        "confidence": 98,
        "description": "Direct mapping of primary key",
    },
    {
        "id": "map-7",
        "source_table_id": "orders",
        "source_column_id": "customer_id",
        "target_table_id": "fact_order",
        "target_column_id": "customer_key",
        "transformation_type": "direct",
        "confidence": 95,
        "description": "Foreign key reference to customer dimension",
    },
    {
        "id": "map-8",
        "source_table_id": "orders",
        "source_column_id": "total_amount",
        "target_table_id": "fact_order",
        "target_column_id": "order_amount",
        "transformation_type": "cast",
        "confidence": 90,
        "formula": "CAST(total_amount AS NUMERIC(10,2))",
        "description": "Convert to BigQuery NUMERIC type",
    },
    {
        "id": "map-9",
        "source_table_id": "orders",
        "source_column_id": "order_date",
        "target_table_id": "fact_order",
        "target_column_id": "order_date_key",
        "transformation_type": "computed",
        "confidence": 82,
        "formula": 'FORMAT_DATE("%Y%m%d", order_date)',
        "description": "Generate date key for dimension lookup",
    },
]

SUGGESTIONS = CUSTOMER_MAPPINGS + ORDER_MAPPINGS

TABLE_MAPPINGS = [
    {
        "source_table_id": "customers",
        "target_table_id": "dim_customer",
        "field_mappings": CUSTOMER_MAPPINGS,
        "completion_percentage": 83,
        "required_fields_covered": 5,
        "total_required_fields": 6,
    },
    {
        "source_table_id": "orders",
        "target_table_id": "fact_order",
        "field_mappings": ORDER_MAPPINGS,
        "completion_percentage": 100,
        "required_fields_covered": 4,
        "total_required_fields": 4,
    },
]

MAPPING_STEPS = [
    ("Analyzing source schema...", 0.8),
    ("Analyzing target schema...", 0.8),
    ("Computing field similarities...", 0.8),
    ("Generating AI suggestions...", 0.8),
    ("Calculating confidence scores...", 0.8),
    ("Mapping generation complete!", 0.8),
]
