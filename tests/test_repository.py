"""
Unit tests for the grid system repository.
"""

import pytest

from gridsystem.core.types import OutputConfig
from gridsystem.error_handling.exceptions import InvalidConfigurationError, NotFoundError
from gridsystem.system.grid_system import GridSystem
from gridsystem.system.repository import GridSystemRepository


@pytest.fixture()
def repository() -> GridSystemRepository:
    return GridSystemRepository([GridSystem("main"), GridSystem("print")])


class TestGridSystemRepository:
    """Tests for GridSystemRepository."""

    def test_lookup(self, repository):
        """Test grid systems are stored by name."""
        assert repository.get_grid_system("main").name == "main"
        assert repository.names() == ["main", "print"]
        assert "print" in repository
        assert len(repository) == 2

    def test_missing(self, repository):
        """Test looking up an unknown name."""
        with pytest.raises(NotFoundError, match="No grid system named 'mobile'"):
            repository.get_grid_system("mobile")

    def test_grid_systems_copy(self, repository):
        """Test the returned mapping doesn't affect the repository."""
        repository.grid_systems.pop("main")
        assert "main" in repository

    def test_replace_same_name(self, repository):
        """Test a system with an existing name replaces the old one and its config."""
        old = repository.get_grid_system("main")
        repository.set_grid_system_config(old, {"template": "a.j2", "output_path": "a.css"})

        new = GridSystem("main")
        repository.add_grid_system(new)

        assert repository.get_grid_system("main") is new
        with pytest.raises(NotFoundError):
            repository.get_grid_system_config("main")

    def test_set_grid_systems(self, repository):
        """Test replacing every registered system."""
        repository.set_grid_systems([GridSystem("mobile")])
        assert repository.names() == ["mobile"]

    def test_not_a_grid_system(self, repository):
        """Test only GridSystems are accepted."""
        with pytest.raises(InvalidConfigurationError):
            repository.add_grid_system("main")

    @pytest.mark.parametrize(
        "config",
        [
            {"template": "grid.css.j2", "output_path": "build/grid.css"},
            OutputConfig(template="grid.css.j2", output_path="build/grid.css"),
        ],
    )
    def test_config(self, repository, config):
        """Test output config is stored per grid system."""
        grid_system = repository.get_grid_system("main")
        repository.set_grid_system_config(grid_system, config)

        stored = repository.get_grid_system_config(grid_system)
        assert stored.template == "grid.css.j2"
        assert stored.output_path == "build/grid.css"
        assert repository.get_grid_system_config("main") == stored

    @pytest.mark.parametrize(
        "config",
        [
            {"template": "grid.css.j2"},
            {"output_path": "build/grid.css"},
            {"template": "grid.css.j2", "output_path": "build/grid.css", "extra": 1},
            {},
        ],
    )
    def test_invalid_config(self, repository, config):
        """Test config needs exactly a template and an output path."""
        with pytest.raises(InvalidConfigurationError, match="only the keys"):
            repository.set_grid_system_config(repository.get_grid_system("main"), config)

    def test_config_for_unregistered_system(self, repository):
        """Test config can only be set for registered systems."""
        with pytest.raises(NotFoundError, match="must be added to the repository"):
            repository.set_grid_system_config(
                GridSystem("mobile"), {"template": "a", "output_path": "b"}
            )

    def test_config_for_replaced_instance(self, repository):
        """Test config can't be set through a same-named but unregistered instance."""
        with pytest.raises(NotFoundError):
            repository.set_grid_system_config(
                GridSystem("main"), {"template": "a", "output_path": "b"}
            )

    def test_missing_config(self, repository):
        """Test reading config that was never set."""
        with pytest.raises(NotFoundError, match="No output config"):
            repository.get_grid_system_config("print")
