from .config import ConfigError, Settings, load_settings
from .errors import EmptyResult, FlowError, IncompleteRow, MalformedHeader, NonPositiveValue
from .models import FlowRow, Link, Node, SankeyGraph, add_row, new_row, remove_row, update_row
from .normalize import assign_colours, rows_to_sankey
from .parsing import Dialect, parse_flows_csv, parse_pair_csv, parse_path_csv, rows_to_csv_bytes, sniff_dialect
from .paths import expand_path, expand_path_rows
from .pipeline import PipelineResult, build_graph, build_graph_from_csv, load_graph, rows_from_csv, run_pipeline
from .storage import FlowRepository, InMemoryFlowRepository, JsonDirectoryFlowRepository
from .validation import find_row_error, validate_rows

__version__ = "0.1.0"
