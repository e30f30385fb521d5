import argparse
import json
import os
import sys

import requests
from dotenv import load_dotenv

# Add the backend directory to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))
load_dotenv(os.path.join(os.path.dirname(__file__), "../.env"))

DEFAULT_SERVER_URL = os.getenv("CLIPLENS_SERVER_URL", "http://localhost:3000")

def check_health(server_url: str) -> bool:
    try:
        response = requests.get(f"{server_url}/health", timeout=5)
    except requests.exceptions.ConnectionError:
        print(f"Could not connect to {server_url}. Is it running?")
        print("Run: uvicorn app.main:app --port 3000")
        return False
    return response.status_code == 200

def upload_video(server_url: str, video_path: str, query: str = None, mode: str = None) -> dict:
    data = {}
    if query:
        data["query"] = query
    if mode:
        data["mode"] = mode

    with open(video_path, "rb") as f:
        files = {"video": (os.path.basename(video_path), f, "video/mp4")}
        response = requests.post(f"{server_url}/api/analyze-video", files=files, data=data)

    payload = response.json()
    if response.status_code != 200:
        raise RuntimeError(f"Analysis failed ({response.status_code}): {payload.get('details') or payload.get('error')}")
    return payload

def reduce_local(annotations_path: str, query: str = None, mode: str = None) -> dict:
    """Reduces a saved annotation dump (one annotation result, or a full response) without the server."""
    from app.services.video_analyzer import VideoAnalyzer

    with open(annotations_path, "r") as f:
        payload = json.load(f)

    results = payload.get("annotationResults") or payload.get("annotation_results")
    if results:
        payload = results[0]

    report = VideoAnalyzer().analyze(payload, query=query, mode=mode)
    return report.model_dump(exclude_none=True)

def print_report(report: dict):
    print(report["analysis"])
    print(f"Overall Confidence: {report['confidence']}%")
    labels = report.get("labels")
    if labels:
        print("\nDetected Labels:")
        for label in labels:
            print(f"- {label['description']} ({label['confidence']}% confidence)")

def main():
    parser = argparse.ArgumentParser(description="Analyze a video with a running ClipLens server.")
    parser.add_argument("video", nargs="?", help="Path to the video file to upload")
    parser.add_argument("--annotations", help="Reduce a saved annotation JSON file locally instead")
    parser.add_argument("--query", help="What to look for (passed through to the server)")
    parser.add_argument("--mode", choices=["timeline", "summary"], help="Reduction mode")
    parser.add_argument("--server", default=DEFAULT_SERVER_URL, help="Server base URL")
    args = parser.parse_args()

    if args.annotations:
        print_report(reduce_local(args.annotations, query=args.query, mode=args.mode))
        return

    if not args.video:
        parser.error("a video path is required unless --annotations is given")
    if not os.path.exists(args.video):
        print(f"Video file not found: {args.video}")
        sys.exit(1)
    if not check_health(args.server):
        sys.exit(1)

    try:
        print_report(upload_video(args.server, args.video, query=args.query, mode=args.mode))
    except RuntimeError as e:
        print(e)
        sys.exit(1)

if __name__ == "__main__":
    main()
