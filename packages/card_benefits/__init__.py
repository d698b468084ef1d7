"""Public interface for the ``card_benefits`` package.

Re-exports the pipeline operations and public models as the stable import
surface. There is no runtime logic here, only symbol re-exports.
"""

from .aggregate import (
    MemoryStatementFile,
    PathStatementFile,
    StatementFile,
    aggregate,
    parse_statement_file,
)
from .api import AnalysisResult, analyze, analyze_paths
from .catalog import CatalogError, all_cards, get_card, initialize_benefits, load_catalog
from .classifier import classify
from .extract import extract, parse_free_text
from .ingest.readers import StatementDecodeError, decode_rows
from .matching import match
from .models import (
    Benefit,
    BenefitDefinition,
    BenefitTransaction,
    CardTheme,
    CreditCard,
    FileProcessingProgress,
    ProgressStatus,
    ResetPeriod,
    Transaction,
)
from .periods import annualize
from .summary import UtilizationSummary, summarize

__all__ = [
    # Pipeline
    "classify",
    "extract",
    "parse_free_text",
    "decode_rows",
    "parse_statement_file",
    "aggregate",
    "annualize",
    "match",
    "summarize",
    "analyze",
    "analyze_paths",
    # Catalog
    "load_catalog",
    "get_card",
    "all_cards",
    "initialize_benefits",
    # Models / types
    "AnalysisResult",
    "Benefit",
    "BenefitDefinition",
    "BenefitTransaction",
    "CardTheme",
    "CreditCard",
    "FileProcessingProgress",
    "MemoryStatementFile",
    "PathStatementFile",
    "ProgressStatus",
    "ResetPeriod",
    "StatementFile",
    "Transaction",
    "UtilizationSummary",
    # Errors
    "CatalogError",
    "StatementDecodeError",
]
