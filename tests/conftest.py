"""
Pytest configuration and shared fixtures for the test suite.
"""

import json
import logging
import os
import tempfile

import pytest

from uniprot_header.config import SystemConfig, ParserConfig, LoggingConfig, set_config
from uniprot_header.errors import set_error_handler


CANONICAL_HEADERS = {
    "YPFU_ECOLI": (
        b">sp|P18355|YPFU_ECOLI Uncharacterized protein in traD-traI intergenic region "
        b"OS=Escherichia coli (strain K12) OX=83333 PE=3 SV=1"
    ),
    "ACN2_ACAGO": (
        b">sp|Q8I6R7|ACN2_ACAGO Acanthoscurrin-2 (Fragment) OS=Acanthoscurria gomesiana "
        b"OX=115339 GN=acantho2 PE=1 SV=1"
    ),
    "CASK_BOVIN": b">sp|P02668|CASK_BOVIN Kappa-casein OS=Bos taurus OX=9913 GN=CSN3 PE=1 SV=1",
}

ISOFORM_HEADERS = {
    "1433B_MACFA": (
        b">sp|Q4R572-2|1433B_MACFA Isoform Short of 14-3-3 protein beta/alpha "
        b"OS=Macaca fascicularis OX=9541 GN=YWHAB"
    ),
    "ALG2_HUMAN": (
        b">sp|Q9H553-2|ALG2_HUMAN Isoform 2 of Alpha-1,3/1,6-mannosyltransferase ALG2 "
        b"OS=Homo sapiens OX=9606 GN=ALG2"
    ),
}

ENV_VARS = (
    "UNIPROT_HEADER_VARIANT", "UNIPROT_HEADER_FORMAT", "UNIPROT_HEADER_STRICT",
    "LOG_LEVEL", "LOG_FILE", "LOG_FORMAT",
)


@pytest.fixture
def canonical_headers():
    return dict(CANONICAL_HEADERS)


@pytest.fixture
def isoform_headers():
    return dict(ISOFORM_HEADERS)


@pytest.fixture
def fasta_file(tmp_path):
    """A small FASTA file mixing canonical, isoform and broken headers."""
    content = b"\n".join([
        CANONICAL_HEADERS["CASK_BOVIN"],
        b"MMKSFFLVVTILALTLPFLGAQEQNQEQPIRCEKDERFFSDKIAKYIPIQYVLSRYPSYGLNYYQQKPVALINNQFLPYPYYAKPAAVRSPAQILQWQVLSNTVPAKSCQAQPTTMARHPHPHLSFMAIPPKKNQDKTEIPTINTIASGEPTSTPTTEAVESTVATLEDSPEVIESPPEINTVQVTSTAV",
        b"",
        ISOFORM_HEADERS["1433B_MACFA"],
        b"MTMDKSELVQKAKLAEQAERYDDMAAAMKAVTEQGHELSNEERNLLSVAYKNVVGARRSSWRVISSIEQKTE",
        b">xx|P12345|AATM_RABIT Aspartate aminotransferase OS=Oryctolagus cuniculus OX=9986 PE=1 SV=2",
        b"MALLHSGRVLSGMAAAFHPGLAAAASARASSWWTHVEMGPPDPILGVTEAFKRDTNSKKMNLGVGAYRDDNGKPYVLPSVRKAEAQ",
    ]) + b"\n"
    path = tmp_path / "headers.fasta"
    path.write_bytes(content)
    return path


@pytest.fixture
def temp_config_file():
    """Create a temporary configuration file for testing."""
    config_data = {
        "parser": {
            "variant": "canonical",
            "output_format": "text",
            "strict": True
        },
        "logging": {
            "level": "DEBUG",
            "format": "json"
        }
    }

    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        json.dump(config_data, f)
        temp_file = f.name

    yield temp_file

    os.unlink(temp_file)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove parser environment variables for the duration of a test."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def setup_test_config(clean_env):
    """Automatically set up test configuration for all tests."""
    test_config = SystemConfig(
        parser=ParserConfig(),
        logging=LoggingConfig(level="WARNING", format="text")
    )
    set_config(test_config)

    yield test_config

    set_config(None)
    set_error_handler(None)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging()."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level

    yield

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
