"""Run a quick test against the app.

Posts a sample question to the submission endpoint through FastAPI's
TestClient and prints the response.
"""

import os
import sys

# Ensure backend folder is on sys.path so `app` package can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient

from app.main import app

SAMPLE = {
    'questionText': 'Sample Question?',
    'options': ['A', 'B', 'C', 'D'],
    'correctAnswerIndex': 2,
}


def run_testclient():
    client = TestClient(app)
    resp = client.post('/api/questions', json=SAMPLE)
    print('STATUS:', resp.status_code)
    try:
        print('JSON:', resp.json())
    except ValueError:
        print('CONTENT:', resp.text)


if __name__ == '__main__':
    run_testclient()
