#!/usr/bin/env python3
"""
run_demo.py - End-to-end demo for the storefront services
- Creates a category and a product, approves the product
- Waits for the inventory service to provision stock from the product.created event
- Customer fills a cart and checks out (opens a Stripe checkout session)
- Simulates the checkout.session.completed webhook and shows the paid order
"""

import json
import os
import time
from typing import Any, Dict, List, Optional

import httpx


class DemoRunner:
    def __init__(self):
        self.catalog_url = os.getenv("CATALOG_URL", "http://localhost:8081")
        self.inventory_url = os.getenv("INVENTORY_URL", "http://localhost:8082")
        self.order_url = os.getenv("ORDER_URL", "http://localhost:8083")

        self.health_endpoints = {
            "catalog": f"{self.catalog_url}/health",
            "inventory": f"{self.inventory_url}/health",
            "order": f"{self.order_url}/health",
        }

        self.customer_id = os.getenv("DEMO_CUSTOMER", "cust-001")
        self.sku = os.getenv("DEMO_SKU", "SKU-001")

    # ---------- helpers ----------
    def show_step(self, title: str):
        print(f"\n=== {title} ===")

    def call_api(
        self,
        method: str,
        url: str,
        data: Optional[Any] = None,
        params: Optional[Dict] = None,
        content: Optional[str] = None,
        expected_status: List[int] = [200, 201],
        quiet: bool = False,
        timeout: int = 30,
    ):
        if not quiet:
            print(f"\n-> {method} {url}")
            if data is not None:
                print(f"   Body: {json.dumps(data, indent=2)}")

        try:
            resp = httpx.request(method, url, json=data, params=params, content=content, timeout=timeout)
        except httpx.RequestError as e:
            if not quiet:
                print(f"   Error: \033[91m{e}\033[0m")
            return {"status": None, "data": None, "raw": None, "error": str(e)}

        if not quiet:
            status_color = "\033[92m" if resp.status_code in expected_status else "\033[93m"
            print(f"   Status: {status_color}{resp.status_code}\033[0m")
        try:
            js = resp.json()
        except json.JSONDecodeError:
            js = None
        if not quiet:
            print(json.dumps(js, indent=2) if js is not None else f"   Content: {resp.text}")
        return {"status": resp.status_code, "data": js, "raw": resp.text}

    # ---------- flow ----------
    def preflight_health_checks(self):
        self.show_step("Preflight: service health")
        for svc, url in self.health_endpoints.items():
            result = self.call_api("GET", url, expected_status=[200], quiet=True)
            ok = result.get("status") == 200
            color = "\033[92m" if ok else "\033[91m"
            status = "OK" if ok else f"FAIL ({result.get('status')})"
            print(f"  - {svc.ljust(10)} -> {color}{status}\033[0m")

    def wait_for_inventory(self, attempts: int = 10) -> bool:
        for _ in range(attempts):
            r = self.call_api("GET", f"{self.inventory_url}/api/v1/inventory/{self.sku}/exists", quiet=True)
            if (r.get("data") or {}).get("data", {}).get("exists"):
                return True
            time.sleep(1)
        return False

    def run_demo(self):
        print("Starting storefront demo")
        print("=" * 50)

        self.preflight_health_checks()

        self.show_step("Supplier: create category")
        self.call_api("POST", f"{self.catalog_url}/api/v1/categories/",
                      data={"name": "Shoes", "description": "Running shoes"}, expected_status=[201, 409])

        self.show_step("Supplier: create product")
        pr = self.call_api(
            "POST",
            f"{self.catalog_url}/api/v1/products/",
            data={
                "name": "Air Zoom",
                "description": "Runner",
                "price": "129.99",
                "brand": "Acme",
                "sku": self.sku,
                "category_name": "Shoes",
                "stock_quantity": 50,
            },
            expected_status=[201, 409],
        )
        product_id = ((pr.get("data") or {}).get("data") or {}).get("id")

        if product_id:
            self.show_step("Steward: approve product")
            self.call_api("PUT", f"{self.catalog_url}/api/v1/products/{product_id}/review",
                          params={"status": "APPROVED"}, data={"reviewed_by": "demo"})

        self.show_step("Inventory: wait for product.created to be consumed")
        if self.wait_for_inventory():
            self.call_api("GET", f"{self.inventory_url}/api/v1/inventory/{self.sku}")
        else:
            print("Inventory not provisioned yet; continuing anyway.")

        self.show_step("Customer: create cart and add item")
        self.call_api("POST", f"{self.order_url}/api/v1/cart/",
                      data={"customer_id": self.customer_id}, expected_status=[201, 409])
        self.call_api("POST", f"{self.order_url}/api/v1/cart/{self.customer_id}",
                      data={"sku": self.sku, "product_name": "Air Zoom", "unit_price": "129.99", "quantity": 2})

        self.show_step("Customer: checkout")
        cr = self.call_api(
            "POST",
            f"{self.order_url}/api/v1/order/checkout",
            data={"customer_id": self.customer_id,
                  "items": [{"sku": self.sku, "product_name": "Air Zoom", "unit_price": "129.99", "quantity": 2}]},
            expected_status=[200],
        )
        order_id = (cr.get("data") or {}).get("order_id")
        if not order_id:
            print("\n\033[93mCheckout did not create an order; stopping.\033[0m")
            return

        # unsigned delivery is accepted when no webhook secret is configured
        self.show_step("Stripe: simulate checkout.session.completed")
        event = {"type": "checkout.session.completed",
                 "data": {"object": {"client_reference_id": str(order_id)}}}
        self.call_api("POST", f"{self.order_url}/api/v1/order/webhook", content=json.dumps(event))

        self.show_step("Order: final state")
        self.call_api("GET", f"{self.order_url}/api/v1/order/{order_id}")

        print("\n\033[92m=== DEMO COMPLETE ===\033[0m")


if __name__ == "__main__":
    DemoRunner().run_demo()
