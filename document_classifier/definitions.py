"""Keyword tables used to identify document types and sources.

Each document type lists keys that must *all* be found in a document of
that type. Sources are scoped to one document type and are only looked
up after that type has been identified. Keys are compared lower-cased
with whitespace removed, so write them that way.
"""

from types import MappingProxyType

from document_classifier.models import build_definitions

SUPPORTED_DOC_TYPES = build_definitions(
    [
        {
            "type": "bankStatement",
            "keys": [
                "statement",
                "accountnumber",
                "openingbalance",
                "closingbalance",
                "date",
            ],
        },
    ]
)

SUPPORTED_SOURCES = MappingProxyType(
    {
        "bankStatement": build_definitions(
            [
                {
                    "type": "rbc",
                    "keys": ["www.rbcroyalbank.com"],
                },
                {
                    "type": "bmo",
                    "keys": ["www.bmo.com"],
                },
            ]
        ),
    }
)
