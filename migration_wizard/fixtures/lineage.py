"""Canned lineage graph for the DB2 insurance schema and its BigQuery targets."""

from typing import Any, Dict, List, Optional, Tuple


def _columns(prefix: str, specs: List[Tuple]) -> List[Dict[str, Any]]:
    """Expand (name, type, nullable, primary_key, reference, description) tuples."""
    columns = []
    for i, (name, data_type, nullable, primary_key, reference, description) in enumerate(specs, 1):
        column: Dict[str, Any] = {
            "id": f"{prefix}-{i}",
            "name": name,
            "data_type": data_type,
            "nullable": nullable,
            "is_primary_key": primary_key,
            "is_foreign_key": reference is not None,
            "description": description,
        }
        if reference:
            column["references"] = {"table": reference[0], "column": reference[1]}
        columns.append(column)
    return columns


def _table(table_id: str, schema: str, kind: str, dialect: str,
           columns: List[Dict[str, Any]], row_count: Optional[int] = None) -> Dict[str, Any]:
    return {
        "id": table_id,
        "name": table_id,
        "schema": schema,
        "type": kind,
        "dialect": dialect,
        "columns": columns,
        "row_count": row_count,
    }


DB2_CUSTOMERS = _table("DB2_CUSTOMERS", "INSURANCE", "source", "db2", _columns("col-db2-customers", [
    ("CUST_ID", "VARCHAR(36)", False, True, None, "Unique customer identifier."),
    ("NAME_JSON", "CLOB", True, False, None, "JSON blob with customer name details (first, last)."),
    ("REGION_CD", "CHAR(3)", True, False, None, "Region code for the customer."),
    ("SEGMENT", "VARCHAR(20)", True, False, None, "Customer segment (e.g., Premium, Standard)."),
    ("DOB", "DATE", True, False, None, "Customer's date of birth."),
    ("EMAIL", "VARCHAR(100)", True, False, None, "Customer's email address."),
    ("PHONE", "VARCHAR(20)", True, False, None, "Customer's phone number."),
    ("ADDR_JSON", "CLOB", True, False, None, "JSON blob with customer address details."),
    ("JOIN_DT", "DATE", True, False, None, "Date the customer joined."),
    ("STATUS", "CHAR(1)", True, False, None, "Customer status (e.g., A-Active, I-Inactive)."),
    ("PREF_CHANNEL", "VARCHAR(10)", True, False, None, "Preferred communication channel."),
    ("RISK_SCORE", "DECIMAL(5,2)", True, False, None, "Calculated risk score for the customer."),
]), row_count=125000)

DB2_POLICIES = _table("DB2_POLICIES", "INSURANCE", "source", "db2", _columns("col-db2-policies", [
    ("POLICY_ID", "VARCHAR(36)", False, True, None, "Unique policy identifier."),
    ("CUST_ID", "VARCHAR(36)", False, False, ("DB2_CUSTOMERS", "CUST_ID"), "Policy holder."),
    ("EFF_DT", "DATE", True, False, None, "Policy effective date."),
    ("EXP_DT", "DATE", True, False, None, "Policy expiry date."),
    ("POL_TYPE", "VARCHAR(20)", True, False, None, "Product type of the policy."),
    ("PREMIUM_AMT", "DECIMAL(15,2)", True, False, None, "Total premium amount."),
    ("POLICY_JSON", "CLOB", True, False, None, "JSON blob with the policy document."),
]), row_count=310000)

DB2_CLAIMS = _table("DB2_CLAIMS", "INSURANCE", "source", "db2", _columns("col-db2-claims", [
    ("CLM_ID", "VARCHAR(36)", False, True, None, "Unique claim identifier."),
    ("POLICY_REF", "VARCHAR(36)", False, False, ("DB2_POLICIES", "POLICY_ID"), "Reference to the policy table."),
    ("CUSTOMER_REF", "VARCHAR(36)", False, False, ("DB2_CUSTOMERS", "CUST_ID"), "Reference to the customer table."),
    ("CLM_DT", "DATE", False, False, None, "Date the claim was filed."),
    ("CLM_STATUS", "CHAR(1)", True, False, None, "Status of the claim (e.g., O-Open, C-Closed)."),
    ("CLM_AMT", "DECIMAL(15,2)", True, False, None, "The total amount claimed by the customer."),
    ("SETTLE_DT", "DATE", True, False, None, "Date the claim was settled."),
    ("LOSS_TYPE", "VARCHAR(20)", True, False, None, "Type of loss reported (e.g., Theft, Accident)."),
]), row_count=842000)

DB2_PAYMENTS = _table("DB2_PAYMENTS", "INSURANCE", "source", "db2", _columns("col-db2-payments", [
    ("PAY_ID", "VARCHAR(36)", False, True, None, "Unique payment identifier."),
    ("CLM_ID", "VARCHAR(36)", False, False, ("DB2_CLAIMS", "CLM_ID"), "Reference to the claim being paid."),
    ("PAY_DT", "TIMESTAMP", True, False, None, "Timestamp of the payment."),
    ("AMT_PAID", "DECIMAL(15,2)", True, False, None, "Amount paid."),
    ("PAY_METHOD", "VARCHAR(20)", True, False, None, "Method of payment (e.g., Card, Bank Transfer)."),
]), row_count=1200000)

CUSTOMERS_DENORM = _table("customers_denorm", "project.dataset", "target", "bigquery", _columns("col-bq-customers", [
    ("customer_id", "INT64", False, True, None, "Customer key."),
    ("name_first", "STRING", True, False, None, "First name parsed from NAME_JSON."),
    ("name_last", "STRING", True, False, None, "Last name parsed from NAME_JSON."),
    ("region_code", "STRING", True, False, None, "Region code."),
    ("customer_segment", "STRING", True, False, None, "Customer segment."),
    ("date_of_birth", "DATE", True, False, None, "Date of birth."),
    ("email_address", "STRING", True, False, None, "Email address."),
    ("phone_number", "STRING", True, False, None, "Phone number."),
    ("joined_on", "DATE", True, False, None, "Join date."),
    ("risk_score", "NUMERIC", True, False, None, "Risk score."),
]))

POLICIES_DENORM = _table("policies_denorm", "project.dataset", "target", "bigquery", _columns("col-bq-policies", [
    ("policy_key", "INT64", False, True, None, "Policy key."),
    ("effective_on", "DATE", True, False, None, "Effective date."),
    ("expires_on", "DATE", True, False, None, "Expiry date."),
    ("product_type", "STRING", True, False, None, "Product type."),
    ("total_premium", "NUMERIC", True, False, None, "Total premium."),
]))

CLAIMS_DENORM = _table("claims_denorm", "project.dataset", "target", "bigquery", _columns("col-bq-claims", [
    ("claim_key", "INT64", False, True, None, "Claim key."),
    ("policy_key", "INT64", True, False, ("policies_denorm", "policy_key"), "Policy key."),
    ("client_key", "INT64", True, False, ("customers_denorm", "customer_id"), "Customer key."),
    ("claim_open_date", "DATE", True, False, None, "Date the claim was opened."),
    ("claim_amount", "NUMERIC", True, False, None, "Claimed amount."),
    ("total_paid", "NUMERIC", True, False, None, "Sum of payments."),
]))


LINEAGE_GRAPH = {
    "tables": [
        DB2_CUSTOMERS, DB2_POLICIES, DB2_CLAIMS, DB2_PAYMENTS,
        CUSTOMERS_DENORM, POLICIES_DENORM, CLAIMS_DENORM,
    ],
    "relationships": [
        {"id": "rel-1", "source_table": "DB2_POLICIES", "source_column": "CUST_ID",
         "target_table": "DB2_CUSTOMERS", "target_column": "CUST_ID",
         "relationship_type": "one-to-many", "confidence": 0.98},
        {"id": "rel-2", "source_table": "DB2_CLAIMS", "source_column": "POLICY_REF",
         "target_table": "DB2_POLICIES", "target_column": "POLICY_ID",
         "relationship_type": "one-to-many", "confidence": 0.97},
        {"id": "rel-3", "source_table": "DB2_CLAIMS", "source_column": "CUSTOMER_REF",
         "target_table": "DB2_CUSTOMERS", "target_column": "CUST_ID",
         "relationship_type": "one-to-many", "confidence": 0.95},
        {"id": "rel-4", "source_table": "DB2_PAYMENTS", "source_column": "CLM_ID",
         "target_table": "DB2_CLAIMS", "target_column": "CLM_ID",
         "relationship_type": "one-to-many", "confidence": 0.96},
    ],
    "mappings": [
        {"id": "dfd-map-1", "source_table": "DB2_CUSTOMERS", "target_table": "customers_denorm",
         "confidence": 0.95, "path": [{"x": 250, "y": 100}, {"x": 800, "y": 100}]},
        {"id": "dfd-map-2", "source_table": "DB2_POLICIES", "target_table": "policies_denorm",
         "confidence": 0.95, "path": [{"x": 250, "y": 250}, {"x": 800, "y": 325}]},
        {"id": "dfd-map-3", "source_table": "DB2_CLAIMS", "target_table": "claims_denorm",
         "confidence": 0.95, "path": [{"x": 250, "y": 550}, {"x": 800, "y": 775}]},
        {"id": "dfd-map-4", "source_table": "DB2_PAYMENTS", "target_table": "claims_denorm",
         "confidence": 0.90, "path": [{"x": 250, "y": 700}, {"x": 800, "y": 775}]},
    ],
    "statistics": {"complexity_score": 8.9},
}


DISCOVERY_STEPS = [
    ("Analyzing schema files...", 1.0),
    ("Extracting table definitions...", 1.5),
    ("Identifying column relationships...", 2.0),
    ("Calculating data lineage...", 1.8),
    ("Generating metadata catalog...", 1.2),
    ("Building lineage graph...", 0.8),
    ("Discovery complete!", 0.5),
]
