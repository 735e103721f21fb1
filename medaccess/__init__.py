"""Patient record access governance: records, grants, audit."""
