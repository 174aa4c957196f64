from locust import HttpUser, task, between
import os
import random


class CampaignOperator(HttpUser):
    """Locust user driving the audience preview and campaign endpoints.

    Login happens outside this API, so an existing session is reused:
    export LOCUST_SESSION_ID and LOCUST_CSRF_TOKEN from a logged-in browser.
    """

    wait_time = between(0.5, 2.5)

    def on_start(self):
        self.headers = {"Content-Type": "application/json"}

        session_id = os.getenv("LOCUST_SESSION_ID")
        csrf_token = os.getenv("LOCUST_CSRF_TOKEN")
        if session_id:
            self.client.cookies.set("sessionid", session_id)
        if csrf_token:
            self.client.cookies.set("csrftoken", csrf_token)
            self.headers["X-CSRFToken"] = csrf_token

    def random_rules(self):
        rules = [
            {"field": "totalSpend", "operator": random.choice([">", ">=", "<"]), "value": str(random.randint(0, 10000))},
            {"field": "numVisits", "operator": random.choice([">", "<=", "="]), "value": random.randint(0, 30)},
            {"field": "lastVisitDate", "operator": ">=", "value": f"2024-{random.randint(1, 12):02d}-01"},
        ]
        return random.sample(rules, random.randint(1, len(rules)))

    @task(5)
    def preview_audience_size(self):
        self.client.post(
            "/api/v1/audiences/size/",
            json={"rules": self.random_rules(), "logicalOperator": random.choice(["AND", "OR"])},
            headers=self.headers,
        )

    @task(3)
    def list_campaigns(self):
        self.client.get("/api/v1/campaigns/", headers=self.headers)

    @task(1)
    def create_campaign(self):
        with self.client.post(
            "/api/v1/campaigns/",
            json={
                "rules": self.random_rules(),
                "message": "Load test campaign",
                "logicalOperator": random.choice(["AND", "OR"]),
            },
            headers=self.headers,
            catch_response=True,
        ) as resp:
            if resp.status_code == 201:
                resp.success()
            else:
                resp.failure(f"Create failed: {resp.status_code}")


# Useful for headless CSV output: `locust --headless -u 50 -r 5 -t 2m -f locustfile.py --csv out --host http://localhost:8000`
