"""
Voice Order Simulation Script

Fires concurrent spoken-order transcripts at a running server to smoke
test matching under load.
Run from project root: python scripts/simulate.py

Modes:
    --match: POST /api/match with plain transcripts
    --voice: POST /api/transcribe with the transcript as base64 "audio"
             (server must be in development mode, where the mock
             transcription service echoes the payload back)

Author: Khalil_Bannouri
Version: 3.0.0
"""

import argparse
import asyncio
import base64
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = "http://localhost:8001"
TOTAL_ORDERS = 50

MENU_NAMES = [
    "Pizza Margherita",
    "Pepperoni Pizza",
    "Caesar Salad",
    "Garlic Bread",
    "Pasta Carbonara",
    "Tiramisu",
    "Coke",
    "Sparkling Water",
]
QUANTITY_WORDS = ["a", "one", "two", "three", "a couple of", "4", "5"]
MODIFIERS = ["", "no onions", "extra cheese", "with ranch", "spicy", "large", "less ice"]
OPENERS = ["Hi, can I get", "I'd like", "Let me have", "We'll take", "Could I order"]


def generate_transcript() -> str:
    """Generate a random spoken order."""
    parts = []
    for name in random.sample(MENU_NAMES, random.randint(1, 3)):
        line = f"{random.choice(QUANTITY_WORDS)} {name.lower()}"
        modifier = random.choice(MODIFIERS)
        if modifier:
            line += f" {modifier}"
        parts.append(line)
    return f"{random.choice(OPENERS)} {' and '.join(parts)}, please."


def build_payload(mode: str, transcript: str) -> tuple[str, dict[str, Any]]:
    if mode == "voice":
        audio = base64.b64encode(transcript.encode("utf-8")).decode("ascii")
        return "/api/transcribe", {"audioBase64": audio, "keyterms": MENU_NAMES}
    return "/api/match", {"transcript": transcript, "keyterms": MENU_NAMES}


async def send_order(
    client: httpx.AsyncClient,
    order_num: int,
    mode: str,
) -> dict[str, Any]:
    """Send one transcript and record the outcome."""
    transcript = generate_transcript()
    path, payload = build_payload(mode, transcript)
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}{path}", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 200:
            items = response.json().get("parsedItems", [])
            return {
                "order_num": order_num,
                "success": True,
                "items": len(items),
                "time": elapsed,
                "mode": mode,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
            "mode": mode,
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
            "mode": mode,
        }


async def run_simulation(mode: str = "both", num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the simulation.

    Args:
        mode: "match", "voice", or "both"
        num_orders: Number of transcripts to send
    """
    print("=" * 70)
    print("🎙️ VOICE ORDER SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"🔧 Mode: {mode}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        tasks = []
        for i in range(num_orders):
            order_mode = mode if mode != "both" else ("match" if i % 2 == 0 else "voice")
            tasks.append(send_order(client, i + 1, order_mode))
        results = await asyncio.gather(*tasks)

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Successful: {len(successful)}/{num_orders}")
    print(f"❌ Failed: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        matched = sum(r["items"] for r in successful)
        print(f"\n📈 Performance Metrics:")
        print(f"   Average Response: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   🍕 Matched Lines: {matched}")

    if failed:
        print(f"\n⚠️  Failed Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']} [{f['mode']}]: {f.get('error', 'Unknown error')}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Voice Order Simulation Script")
    parser.add_argument("--match", action="store_true", help="Transcript matching only")
    parser.add_argument("--voice", action="store_true", help="Mock transcription only")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    args = parser.parse_args()

    if args.match:
        mode = "match"
    elif args.voice:
        mode = "voice"
    else:
        mode = "both"

    summary = asyncio.run(run_simulation(mode=mode, num_orders=args.orders))
    sys.exit(0 if summary["failed"] == 0 else 1)
