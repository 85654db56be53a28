from locust import HttpUser, task, between
import csv
import random
import os

# Wallets to query, one per row under a "wallet" column
WALLETS_CSV = os.getenv("LOCUST_WALLETS_CSV", "wallets.csv")

wallets = []
with open(WALLETS_CSV) as f:
    for row in csv.DictReader(f):
        wallets.append(row["wallet"])


class PrintWatchUser(HttpUser):
    wait_time = between(1, 2)

    @task(3)
    def wallet_info(self):
        self.client.get(
            "/get-wallet-info",
            params={"address": random.choice(wallets)},
            name="/get-wallet-info",
        )

    @task(1)
    def daily_transfer_totals(self):
        # one RPC round trip per signature in the window; expect long tails
        self.client.get(
            "/get-daily-transfer-totals",
            params={"address": random.choice(wallets)},
            name="/get-daily-transfer-totals",
        )
