# Common utilities
from .config_loader import list_config_files, load_config
from .csv_utils import CsvReadResult, configure_csv, parse_csv_text, read_csv, to_csv_text, write_csv
from .exceptions import ConfigurationError, PreflightError
from .log_config import setup_logging
from .settings import Settings, get_settings
from .text_utils import clean_money, is_http_url, normalize_header, slugify_handle
