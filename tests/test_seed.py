"""
Tests — ``flask seed-demo`` demo dataset.
"""

from bountyhub.models.program import Program
from bountyhub.models.report import Report
from bountyhub.models.user import User
from bountyhub.services.seed_service import DEMO_PASSWORD, seed_demo_data


class TestSeedDemo:
    def test_seed_creates_dataset(self):
        created = seed_demo_data()
        assert created == 15
        assert User.query.filter_by(user_type="organization").count() == 3
        assert User.query.filter_by(user_type="hacker").count() == 3
        assert Program.query.count() == 3
        assert Report.query.filter_by(status="pending").count() == 1

    def test_seed_is_idempotent(self):
        seed_demo_data()
        assert seed_demo_data() == 0
        assert User.query.count() == 6

    def test_demo_login(self, client):
        seed_demo_data()
        res = client.post("/api/auth/login", json={"username": "securityalex", "password": DEMO_PASSWORD})
        assert res.status_code == 200
        assert res.get_json()["reputation"] == 95

    def test_cli_command(self, app):
        result = app.test_cli_runner().invoke(args=["seed-demo"])
        assert result.exit_code == 0
        assert Program.query.count() == 3
