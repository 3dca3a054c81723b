import pytest

from compliance import Driver, Roster


@pytest.fixture
def roster():
    """
    Four drivers, one per Omnilink status, as of 2023-10-15:

    - Ana: Omnilink expired 106 days ago, CNH expires today
    - Bruno: Omnilink expires in 90 days, CNH valid
    - Carla: Omnilink expires in 183 days, CNH expired
    - Diego: no dates recorded
    """
    return Roster(
        [
            Driver(
                "Ana Souza",
                cpf="111",
                cnh_expiry="2023-10-15",
                omnilink_score_registration_date="2023-01-01",
                status_indicacao="indicado",
            ),
            Driver(
                "Bruno Lima",
                cpf="222",
                cnh_expiry="2025-01-01",
                omnilink_score_registration_date="2023-07-13",
                status_indicacao="retificado",
            ),
            Driver(
                "Carla Mendes",
                cpf="333",
                cnh_expiry="2023-01-01",
                omnilink_score_registration_date="2023-10-15",
            ),
            Driver("Diego Rocha", cpf="444", status_indicacao="indicado"),
        ]
    )


ROSTER_YAML = """
drivers:
  - full_name: Ana Souza
    cpf: '111'
    cnh_expiry: '2023-10-15'
    omnilink_score_registration_date: '2023-01-01'
    omnilink_score_expiry_date: '2023-07-01'
    omnilink_score_status: em_dia
    status_indicacao: indicado
  - full_name: Bruno Lima
    cpf: '222'
    cnh_expiry: 2025-01-01
    omnilink_score_registration_date: 2023-07-13
    omnilink_score_expiry_date: '2024-01-13'
    omnilink_score_status: em_dia
    status_indicacao: retificado
  - full_name: Diego Rocha
    cpf: '444'
"""


@pytest.fixture
def roster_file(tmp_path):
    path = tmp_path / "roster.yaml"
    path.write_text(ROSTER_YAML, encoding="utf-8")
    return path
