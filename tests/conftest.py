#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import io

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from seqprint.formatters import configure


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def default_print_options():
    """Restore module default PrintOptions after every test."""
    configure(preset="default")
    yield
    configure(preset="default")


@pytest.fixture
def sink() -> io.StringIO:
    """In-memory text sink for print_any()."""
    return io.StringIO()
