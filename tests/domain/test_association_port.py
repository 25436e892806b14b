from __future__ import annotations

from roster.database.repos.association_repo import AssociationManager
from roster.domain.ports.associations import AssociationPort


def test_manager_provides_every_port_operation():
    wanted = [n for n in vars(AssociationPort) if not n.startswith("_")]
    assert wanted
    for name in wanted:
        assert callable(getattr(AssociationManager, name, None)), name
