"""Picking load test scenarios.

Stateful SequentialTaskSet journeys over the demo batch: a full run with
shortages and packing, a picker who keeps revising one shortage while
re-reading the packing view, and a run that is abandoned midway.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import invalid_shortage_data, shortage_data, start_session_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import PickSessionState


class _PickJourney(SequentialTaskSet):
    """Start and pick-list steps shared by every journey."""

    def on_start(self):
        self.state = PickSessionState()

    def start_session(self):
        payload = start_session_data()
        with self.client.post(
            "/pick-sessions",
            json=payload,
            catch_response=True,
            name="POST /pick-sessions",
        ) as resp:
            if resp.status_code == 201:
                self.state.session_id = resp.json()["session_id"]
                self.state.batch_id = payload["batch_id"]
                if resp.json()["nothing_to_pick"]:
                    resp.failure("Demo batch is empty: start the server with SEED_DEMO_DATA=1")
                    self.interrupt()
            else:
                resp.failure(f"Start session failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    def load_pick_list(self):
        with self.client.get(
            f"/pick-sessions/{self.state.session_id}",
            catch_response=True,
            name="GET /pick-sessions/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.items = resp.json()["items"]
            else:
                resp.failure(f"Pick list failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    def report_shortage(self, item: dict, name="PUT /pick-sessions/{id}/items/{product_id}/shortage"):
        with self.client.put(
            f"/pick-sessions/{self.state.session_id}/items/{item['product_id']}/shortage",
            json=shortage_data(item["total_qty"]),
            catch_response=True,
            name=name,
        ) as resp:
            if resp.status_code == 200:
                self.state.shortages_reported += 1
            else:
                resp.failure(f"Report shortage failed: {resp.status_code} — {extract_error_detail(resp)}")

    def packing_view(self):
        with self.client.get(
            f"/pick-sessions/{self.state.session_id}/packing",
            catch_response=True,
            name="GET /pick-sessions/{id}/packing",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Packing view failed: {resp.status_code} — {extract_error_detail(resp)}")


class FullPickRunJourney(_PickJourney):
    """Start -> Pick list -> Done/Shortage per item -> Packing -> Finish."""

    @task
    def start(self):
        self.start_session()

    @task
    def pick_list(self):
        self.load_pick_list()

    @task
    def pick_items(self):
        for item in self.state.items:
            if random.random() < 0.3:
                self.report_shortage(item)
                continue
            with self.client.put(
                f"/pick-sessions/{self.state.session_id}/items/{item['product_id']}/done",
                catch_response=True,
                name="PUT /pick-sessions/{id}/items/{product_id}/done",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Report done failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def packing(self):
        self.packing_view()

    @task
    def finish(self):
        with self.client.put(
            f"/pick-sessions/{self.state.session_id}/finish",
            catch_response=True,
            name="PUT /pick-sessions/{id}/finish",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "Finished"
            else:
                resp.failure(f"Finish failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShortageRevisionJourney(_PickJourney):
    """Start -> Shortage -> Packing -> Revised shortage -> Packing -> Finish.

    Every packing read must reflect the latest report, so this journey
    hammers the recompute path.
    """

    @task
    def start(self):
        self.start_session()

    @task
    def pick_list(self):
        self.load_pick_list()

    @task
    def revise_shortages(self):
        item = random.choice(self.state.items)
        for _ in range(random.randint(2, 4)):
            self.report_shortage(item)
            self.packing_view()

    @task
    def rejected_report(self):
        item = random.choice(self.state.items)
        with self.client.put(
            f"/pick-sessions/{self.state.session_id}/items/{item['product_id']}/shortage",
            json=invalid_shortage_data(),
            catch_response=True,
            name="PUT /pick-sessions/{id}/items/{product_id}/shortage [invalid]",
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Invalid shortage was not rejected: {resp.status_code}")

    @task
    def finish(self):
        with self.client.put(
            f"/pick-sessions/{self.state.session_id}/finish",
            catch_response=True,
            name="PUT /pick-sessions/{id}/finish",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Finish failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class AbandonedRunJourney(_PickJourney):
    """Start -> Pick list -> one shortage -> Abandon."""

    @task
    def start(self):
        self.start_session()

    @task
    def pick_list(self):
        self.load_pick_list()

    @task
    def one_shortage(self):
        self.report_shortage(self.state.items[0])

    @task
    def abandon(self):
        with self.client.put(
            f"/pick-sessions/{self.state.session_id}/abandon",
            catch_response=True,
            name="PUT /pick-sessions/{id}/abandon",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "Abandoned"
            else:
                resp.failure(f"Abandon failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class PickerUser(HttpUser):
    """Locust user simulating a picker on the warehouse floor.

    Weighted distribution:
    - 60% Full run (happy path with some shortages)
    - 25% Shortage revisions with repeated packing reads
    - 15% Abandoned runs
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        FullPickRunJourney: 12,
        ShortageRevisionJourney: 5,
        AbandonedRunJourney: 3,
    }
