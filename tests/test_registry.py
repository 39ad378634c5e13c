"""
Tests for the domain registry and the command-line driver.
"""

import pytest

from symquad.__main__ import main
from symquad.domains import PrismDomain, create_domain, list_domains


class TestRegistry:

    def test_prism_registered(self):
        assert "pri" in list_domains()

    def test_create(self):
        domain = create_domain("pri", 3, seed=1)
        assert isinstance(domain, PrismDomain)
        assert domain.qdeg == 3

    def test_unknown_shape(self):
        with pytest.raises(KeyError):
            create_domain("hex", 3)


class TestCommandLine:

    def test_product_configuration(self, capsys):
        assert main(["--qdeg", "2", "--orbits", "0", "0", "0", "1", "0", "0", "--seed", "5"]) == 0
        out = capsys.readouterr().out
        assert "basis functions: 4" in out
        assert "points: 6" in out
        # header lines plus one line per point
        assert len(out.strip().splitlines()) == 3 + 6

    def test_multiprecision(self, capsys):
        assert main(["--qdeg", "0", "--orbits", "1", "0", "0", "0", "0", "0", "--dps", "30"]) == 0
        assert "basis functions: 1" in capsys.readouterr().out

    def test_invalid_orbits(self):
        assert main(["--qdeg", "2", "--orbits", "2", "0", "0", "0", "0", "0"]) == 2
