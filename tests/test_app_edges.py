import json
import unittest

from app import app as flask_app  # noqa: E402
import app as app_mod             # noqa: E402
from game import SessionStore     # noqa: E402


class TestFlaskAPIEdges(unittest.TestCase):
    def setUp(self):
        self._orig_sessions = app_mod.sessions
        app_mod.sessions = SessionStore()
        self.client = flask_app.test_client()
        r = self._post("/api/new", {"seed": 5})
        self.gid = r.get_json()["gameId"]

    def tearDown(self):
        app_mod.sessions = self._orig_sessions

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type="application/json")

    def test_given_out_of_range_coord_when_selecting_then_400_and_state_untouched(self):
        r = self._post("/api/select", {"gameId": self.gid, "coord": [99, 99]})
        self.assertEqual(r.status_code, 400)
        d = r.get_json()
        self.assertFalse(d["ok"])
        self.assertIn("outside", d["error"])
        state = self.client.get(f"/api/state/{self.gid}").get_json()["state"]
        self.assertEqual(state["selection"], [])

    def test_given_malformed_coord_when_selecting_then_400(self):
        for bad in ([1], "1,2", [1, "x"], None):
            r = self._post("/api/select", {"gameId": self.gid, "coord": bad})
            self.assertEqual(r.status_code, 400, bad)
            self.assertFalse(r.get_json()["ok"])

    def test_given_non_integer_coord_when_selecting_then_400_and_nothing_selected(self):
        for bad in ([1.5, 2], [1.9, 0.2], [True, 0], ["3", "4"], "34"):
            r = self._post("/api/select", {"gameId": self.gid, "coord": bad})
            self.assertEqual(r.status_code, 400, bad)
            self.assertFalse(r.get_json()["ok"])
        state = self.client.get(f"/api/state/{self.gid}").get_json()["state"]
        self.assertEqual(state["selection"], [])

    def test_given_unknown_phase_when_selecting_then_400(self):
        r = self._post("/api/select", {"gameId": self.gid, "coord": [0, 0], "phase": "hover"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("phase", r.get_json()["error"])

    def test_given_unknown_game_when_calling_then_404(self):
        r = self._post("/api/select", {"gameId": "nope", "coord": [0, 0]})
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.get_json()["error"], "unknown game")
        r2 = self.client.get("/api/state/nope")
        self.assertEqual(r2.status_code, 404)
        r3 = self.client.delete("/api/game/nope")
        self.assertEqual(r3.status_code, 404)

    def test_given_missing_game_id_when_calling_then_400(self):
        r = self._post("/api/release", {})
        self.assertEqual(r.status_code, 400)
        self.assertIn("gameId", r.get_json()["error"])

    def test_given_bad_seed_when_creating_then_400(self):
        r = self._post("/api/new", {"seed": "abc"})
        self.assertEqual(r.status_code, 400)
        for bad in (True, False, 1.5):
            r = self._post("/api/new", {"seed": bad})
            self.assertEqual(r.status_code, 400, bad)
            self.assertIn("seed", r.get_json()["error"])
        self.assertEqual(len(app_mod.sessions), 1)

    def test_given_bad_touch_payload_when_posted_then_400(self):
        r = self._post("/api/touch", {"gameId": self.gid, "x": 10, "y": 10})
        self.assertEqual(r.status_code, 400)
        r2 = self._post("/api/touch", {"gameId": self.gid, "x": 10, "y": 10, "cellWidth": 0, "cellHeight": 10})
        self.assertEqual(r2.status_code, 400)

    def test_given_touch_outside_grid_with_no_path_when_posted_then_ignored(self):
        payload = {"gameId": self.gid, "x": 5000, "y": 5000, "cellWidth": 100, "cellHeight": 100, "phase": "first"}
        r = self._post("/api/touch", payload)
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.get_json()["ignored"])

    def test_given_single_token_when_released_then_cleared_and_no_move_spent(self):
        self._post("/api/select", {"gameId": self.gid, "coord": [0, 0], "phase": "first"})
        d = self._post("/api/release", {"gameId": self.gid}).get_json()
        self.assertTrue(d["cleared"])
        self.assertIsNone(d["resolution"])
        self.assertEqual(d["state"]["score"], 0)

    def test_given_game_when_deleted_then_gone(self):
        r = self.client.delete(f"/api/game/{self.gid}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(self.client.get(f"/api/state/{self.gid}").status_code, 404)


if __name__ == "__main__":
    unittest.main(verbosity=2)
