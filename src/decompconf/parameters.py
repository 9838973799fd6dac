"""Parameters: all tunable settings for one decompilation run, with JSON (de)serialization."""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from decompconf import serdes
from decompconf.address import AddressRange, format_address, range_to_document

logger = logging.getLogger(__name__)

# Document keys (wire contract; do not rename)
KEY_VERBOSE_OUT = "verboseOut"
KEY_KEEP_ALL_FUNCS = "keepAllFuncs"
KEY_SELECTED_DECODE_ONLY = "selectedDecodeOnly"
KEY_OUTPUT_FILE = "outputFile"
KEY_ORDINAL_NUM_DIR = "ordinalNumberDirectory"
KEY_ORDINAL_NUM_DIR_LEGACY = "ordinalNumDirectory"
KEY_SELECTED_RANGES = "selectedRanges"
KEY_ENTRY_POINT = "entryPoint"
KEY_MAIN_ADDRESS = "mainAddress"
KEY_SECTION_VMA = "sectionVMA"

# Document key -> set-valued attribute, in document order
_STRING_SET_KEYS: tuple[tuple[str, str], ...] = (
    ("userStaticSignPaths", "user_static_signature_paths"),
    ("staticSignPaths", "static_signature_paths"),
    ("libraryTypeInfoPaths", "library_type_info_paths"),
    ("cryptoPatternPaths", "crypto_pattern_paths"),
    ("abiPaths", "abi_paths"),
    ("selectedFunctions", "selected_functions"),
    ("frontendFunctions", "frontend_functions"),
    ("selectedNotFoundFncs", "selected_not_found_functions"),
    ("llvmPasses", "llvm_passes"),
)

_ADDRESS_KEYS: tuple[tuple[str, str], ...] = (
    (KEY_ENTRY_POINT, "entry_point"),
    (KEY_MAIN_ADDRESS, "main_address"),
    (KEY_SECTION_VMA, "section_vma"),
)

# Path sets re-anchored by fix_relative_paths (semantic_paths is runtime-only but still a path set)
_PATH_SET_ATTRS: tuple[str, ...] = (
    "user_static_signature_paths",
    "static_signature_paths",
    "library_type_info_paths",
    "semantic_paths",
    "abi_paths",
    "crypto_pattern_paths",
)


def _anchor_path(path: str, base_dir: str) -> str:
    """Join a relative path onto base_dir and return its absolute form; absolute paths unchanged."""
    if os.path.isabs(path):
        return path
    return os.path.abspath(os.path.join(base_dir, path))


@dataclass
class Parameters:
    """
    Settings for a single decompilation run.

    Scalars are plain attributes with no validation; the engine consuming them
    is responsible for that. Collections are public for bulk population.
    Only the fields listed in serialize() are persisted; output/input file
    locations and memory limits are runtime-only.
    """

    verbose_output: bool = False
    keep_all_functions: bool = False  # otherwise only functions reachable from main
    selected_decode_only: bool = False
    max_memory_limit_half_ram: bool = False

    output_file: str = ""
    output_bitcode_file: str = ""
    output_asm_file: str = ""
    output_llvmir_file: str = ""
    output_config_file: str = ""
    output_unpacked_file: str = ""
    input_file: str = ""
    input_pdb_file: str = ""
    ordinal_numbers_directory: str = ""

    max_memory_limit: int = 0  # bytes, 0 = unset

    # None = address not set (distinct from 0)
    entry_point: Optional[int] = None
    main_address: Optional[int] = None
    section_vma: Optional[int] = None

    user_static_signature_paths: set[str] = field(default_factory=set)
    static_signature_paths: set[str] = field(default_factory=set)
    library_type_info_paths: set[str] = field(default_factory=set)
    semantic_paths: set[str] = field(default_factory=set)
    abi_paths: set[str] = field(default_factory=set)
    crypto_pattern_paths: set[str] = field(default_factory=set)

    selected_functions: set[str] = field(default_factory=set)
    frontend_functions: set[str] = field(default_factory=set)
    selected_not_found_functions: set[str] = field(default_factory=set)
    llvm_passes: set[str] = field(default_factory=set)

    selected_ranges: list[AddressRange] = field(default_factory=list)

    def is_something_selected(self) -> bool:
        """True if any function or range was selected for selective decompilation."""
        return bool(self.selected_functions) or bool(self.selected_ranges)

    def is_frontend_function(self, name: str) -> bool:
        """
        True if any frontend helper name occurs as a substring of name.

        Frontend helpers get numeric suffixes (e.g. foo_helper_123), so this is
        a containment test, not equality.
        """
        return any(helper in name for helper in self.frontend_functions)

    def fix_relative_paths(self, base_path: str) -> None:
        """
        Anchor relative paths on the directory containing base_path.

        base_path is normally the location of the config document, so paths
        inside it resolve relative to the document rather than the working
        directory. Absolute paths are kept as-is, which makes this idempotent.
        """
        base_dir = os.path.dirname(base_path)
        # empty entries carry no location and are dropped
        for attr in _PATH_SET_ATTRS:
            paths = getattr(self, attr)
            setattr(self, attr, {_anchor_path(p, base_dir) for p in paths if p})
        if self.ordinal_numbers_directory:
            self.ordinal_numbers_directory = _anchor_path(self.ordinal_numbers_directory, base_dir)
        logger.debug("Relative paths anchored on %s", base_dir or ".")

    def serialize(self) -> dict[str, Any]:
        """Return the JSON document (dict) holding the persisted parameters."""
        doc: dict[str, Any] = {
            KEY_VERBOSE_OUT: self.verbose_output,
            KEY_KEEP_ALL_FUNCS: self.keep_all_functions,
            KEY_SELECTED_DECODE_ONLY: self.selected_decode_only,
            KEY_OUTPUT_FILE: self.output_file,
            KEY_ORDINAL_NUM_DIR: self.ordinal_numbers_directory,
            KEY_SELECTED_RANGES: [range_to_document(r) for r in self.selected_ranges],
        }
        for key, attr in _STRING_SET_KEYS:
            doc[key] = serdes.string_list(getattr(self, attr))
        for key, attr in _ADDRESS_KEYS:
            doc[key] = getattr(self, attr)
        return doc

    def deserialize(self, document: Any) -> None:
        """
        Read parameters from a JSON document (dict).

        Anything other than an object is ignored and leaves every field as it
        was. Missing or mistyped keys keep the current value, except
        verboseOut which falls back to False.
        """
        if not isinstance(document, dict):
            logger.debug("Parameters document is not an object; ignored")
            return

        self.verbose_output = serdes.read_bool(document, KEY_VERBOSE_OUT, False)
        self.keep_all_functions = serdes.read_bool(document, KEY_KEEP_ALL_FUNCS, self.keep_all_functions)
        self.selected_decode_only = serdes.read_bool(
            document, KEY_SELECTED_DECODE_ONLY, self.selected_decode_only
        )
        self.ordinal_numbers_directory = serdes.read_string(
            document,
            KEY_ORDINAL_NUM_DIR,
            serdes.read_string(document, KEY_ORDINAL_NUM_DIR_LEGACY, self.ordinal_numbers_directory),
        )
        self.output_file = serdes.read_string(document, KEY_OUTPUT_FILE, self.output_file)

        ranges = serdes.read_range_list(document, KEY_SELECTED_RANGES)
        if ranges is not None:
            self.selected_ranges = ranges
        for key, attr in _STRING_SET_KEYS:
            values = serdes.read_string_list(document, key)
            if values is not None:
                setattr(self, attr, set(values))

        for key, attr in _ADDRESS_KEYS:
            setattr(self, attr, serdes.read_address(document, key, getattr(self, attr)))

    def to_json(self, pretty: bool = True) -> str:
        return serdes.dump_document(self.serialize(), pretty=pretty)

    @classmethod
    def from_json(cls, text: str) -> Parameters:
        """Build Parameters from JSON text. Malformed text gives a default instance."""
        params = cls()
        params.deserialize(serdes.load_document(text))
        return params

    def snapshot(self) -> Parameters:
        """Independent deep copy, for handing a read-only view to another owner."""
        return copy.deepcopy(self)

    def describe(self) -> str:
        """One-line summary for logs."""
        return (
            f"entry={format_address(self.entry_point)} main={format_address(self.main_address)} "
            f"vma={format_address(self.section_vma)} functions={len(self.selected_functions)} "
            f"ranges={len(self.selected_ranges)}"
        )
