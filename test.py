#!/usr/bin/env python3
"""
Smoke test script for a running IsraelGPT chat proxy.
Uses the server section of config.yml to find the proxy.
"""

import asyncio
from typing import Dict, Any

import httpx
import yaml

def load_config() -> Dict[str, Any]:
    """Load configuration from config.yml"""
    try:
        with open("config.yml", encoding="utf-8") as file:
            return yaml.safe_load(file) or {}
    except FileNotFoundError:
        return {}

async def check_feature(feature_name: str, check_func: callable):
    """Run a feature check with formatted output"""
    print(f"\n=== Checking {feature_name} ===")
    try:
        await check_func()
        print(f"✅ {feature_name} check passed")
    except Exception as e:
        print(f"❌ {feature_name} check failed: {str(e)}")
        raise

async def check_health(client: httpx.AsyncClient, base_url: str):
    resp = await client.get(f"{base_url}/health")
    resp.raise_for_status()
    data = resp.json()
    print(f"Mistral API is {data['services']['mistral_api']}")

async def check_method_not_allowed(client: httpx.AsyncClient, base_url: str):
    resp = await client.get(f"{base_url}/api/chat")
    assert resp.status_code == 405, f"Expected 405, got {resp.status_code}"
    assert resp.json() == {"error": "Method Not Allowed"}

async def check_chat(client: httpx.AsyncClient, base_url: str):
    request_data = {"messages": [{"role": "user", "content": "Shalom!"}]}
    resp = await client.post(f"{base_url}/api/chat", json=request_data)
    resp.raise_for_status()
    message = resp.json()["message"]
    print(f"{message['role']}: {message['content'][:80]}")

async def run_checks():
    server_config = load_config().get("server", {})
    host = server_config.get("host", "127.0.0.1")
    host = "127.0.0.1" if host == "0.0.0.0" else host
    port = server_config.get("port", 3000)
    base_url = f"http://{host}:{port}"

    async with httpx.AsyncClient(timeout=60.0) as client:
        await check_feature("Health Check", lambda: check_health(client, base_url))
        await check_feature("Method Not Allowed", lambda: check_method_not_allowed(client, base_url))
        await check_feature("Chat", lambda: check_chat(client, base_url))

if __name__ == "__main__":
    print("Running IsraelGPT Proxy smoke checks")
    asyncio.run(run_checks())
