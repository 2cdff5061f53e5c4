import sys

import httpx

API_BASE = "http://localhost:8000"
DEFAULT_URL = "https://example.com/"


def run_analysis(target_url: str) -> int:
    print(f"Starting analysis for {target_url}...")
    try:
        resp = httpx.post(f"{API_BASE}/seo-analysis", json={"url": target_url}, timeout=60.0)
    except httpx.HTTPError as e:
        print(f"Error: could not reach {API_BASE}: {e}")
        return 1

    data = resp.json()
    if resp.status_code != 200:
        print(f"Analysis failed ({resp.status_code}): {data.get('error')}")
        return 1

    print(f"Final URL: {data['finalUrl']}")
    print(f"Overall: {data['overallScore']} ({data['grade']}), scoring v{data['scoringVersion']}")
    for category in data["categories"]:
        print(f"  {category['label']:<22} {category['score']:>3}  (weight {category['weight']}%)")

    print(f"\n{len(data['improvements'])} improvements:")
    for tip in data["improvements"]:
        print(f"  [{tip['priority']:<6}] {tip['title']} - {tip['description']}")
    return 0


if __name__ == "__main__":
    sys.exit(run_analysis(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_URL))
