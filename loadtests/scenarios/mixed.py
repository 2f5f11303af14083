"""Mixed lunch-rush workload.

Most visitors order; some only fiddle with their cart.
"""

from locust import HttpUser, between

from loadtests.scenarios.canteen import CartBrowsingJourney, KitchenJourney, LunchOrderJourney


class LunchRushUser(HttpUser):
    """Weighted mix of customers and kitchen staff during a lunch rush."""

    wait_time = between(0.5, 2)
    tasks = {
        LunchOrderJourney: 7,
        CartBrowsingJourney: 2,
        KitchenJourney: 1,
    }
