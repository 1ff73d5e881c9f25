"""
Deterministic payload fixtures for the benchmark scenarios.

Every fixture is ASCII JSON text whose byte length equals its declared size.
Documents shorter than the target are padded with trailing whitespace (still
valid JSON); generated documents are grown past the target and cut to size.
"""

import base64
import json
import random
import uuid
from typing import Any, Callable, Dict, List

from .models import PayloadSizeTest

# Fixed seed so that every run benchmarks identical bytes.
FIXTURE_SEED = 1337

# Link lengths that matter in practice for where an SDLP link can travel.
URL_LENGTH_LIMITS = [
    (2000, 'QR Code optimized (2KB)'),
    (8192, 'Browser address bar (8KB)'),
    (32768, 'HTTP header limit (32KB)'),
]

BASE_TIMESTAMP_MS = 1704103200000  # 2024-01-01T10:00:00Z


def _dumps(document: Any) -> str:
    return json.dumps(document, separators=(',', ':'))


def _fit(text: str, size: int) -> str:
    return text[:size].ljust(size)


def _grow(document: Dict[str, Any], add_entry: Callable[[Dict[str, Any], int], None],
          target_size: int) -> str:
    """Call add_entry with an increasing counter until the JSON reaches target_size."""
    current = _dumps(document)
    counter = 0
    while len(current) < target_size:
        add_entry(document, counter)
        counter += 1
        current = _dumps(document)
    return _fit(current, target_size)


def generate_api_config(target_size: int) -> str:
    config = {
        'service': {
            'name': 'data-processing-service',
            'version': '2.1.0',
            'endpoints': [],
            'authentication': {
                'type': 'bearer',
                'tokenEndpoint': 'https://auth.example.com/token',
                'scopes': ['read', 'write', 'admin'],
            },
            'rateLimit': {'requests': 1000, 'window': 3600, 'burstSize': 50},
        }
    }

    def add_endpoint(doc, counter):
        n = counter + 1
        doc['service']['endpoints'].append({
            'path': f'/api/v1/resource{n}',
            'method': 'GET',
            'description': f'Retrieve resource {n} with optional filtering and pagination',
            'parameters': {
                'limit': {'type': 'integer', 'default': 50, 'max': 1000},
                'offset': {'type': 'integer', 'default': 0},
                'filter': {'type': 'string', 'description': 'Optional filter expression'},
            },
            'response': {
                'type': 'object',
                'properties': {
                    'data': {'type': 'array', 'items': {'$ref': f'#/definitions/Resource{n}'}},
                    'meta': {'$ref': '#/definitions/PaginationMeta'},
                },
            },
        })

    return _grow(config, add_endpoint, target_size)


def generate_large_dataset(target_size: int, rng: random.Random) -> str:
    dataset = {
        'metadata': {
            'version': '1.0',
            'generated': '2024-01-01T10:00:00Z',
            'source': 'benchmark-generator',
        },
        'data': [],
    }
    categories = ['electronics', 'books', 'clothing', 'food']
    materials = ['plastic', 'metal', 'wood', 'fabric']

    def add_item(doc, counter):
        item_id = counter + 1
        doc['data'].append({
            'id': item_id,
            'name': f'Item {item_id}',
            'category': categories[item_id % 4],
            'price': round(rng.random() * 1000, 2),
            'inStock': rng.random() > 0.3,
            'tags': [f'tag{item_id % 10}', f'category{item_id % 5}'],
            'description': (f'This is a detailed description for item {item_id} '
                            'which contains various features and specifications.'),
            'attributes': {
                'weight': round(rng.random() * 100, 2),
                'dimensions': {
                    'length': round(rng.random() * 50, 2),
                    'width': round(rng.random() * 50, 2),
                    'height': round(rng.random() * 50, 2),
                },
                'material': materials[item_id % 4],
            },
        })

    return _grow(dataset, add_item, target_size)


def generate_complex_state(target_size: int, rng: random.Random) -> str:
    state = {
        'application': {
            'name': 'Complex Application State',
            'version': '3.2.1',
            'sessionId': str(uuid.UUID(int=rng.getrandbits(128), version=4)),
        },
        'user': {'id': 'user-12345', 'preferences': {}, 'permissions': []},
        'ui': {'theme': 'dark', 'language': 'en-US', 'components': {}},
        'data': {'cache': {}, 'pending': []},
    }

    def add_component(doc, counter):
        doc['ui']['components'][f'component{counter}'] = {
            'type': 'panel',
            'visible': True,
            'position': {'x': counter * 10, 'y': counter * 15},
            'size': {'width': 200, 'height': 150},
            'properties': {
                'title': f'Component {counter}',
                'resizable': True,
                'collapsible': False,
            },
        }
        doc['data']['cache'][f'cache_key_{counter}'] = {
            'key': f'cache_key_{counter}',
            'value': f'Cached value {counter} with some additional data',
            'timestamp': BASE_TIMESTAMP_MS - counter * 1000,
            'expiry': BASE_TIMESTAMP_MS + 3600000,
        }
        doc['user']['permissions'].append(f'permission:action{counter}')

    return _grow(state, add_component, target_size)


def generate_large_config(target_size: int) -> str:
    config = {
        'application': {
            'name': 'Enterprise Application',
            'services': {},
            'databases': {},
            'queues': {},
        }
    }

    def add_service(doc, counter):
        app = doc['application']
        app['services'][f'service{counter}'] = {
            'enabled': True,
            'endpoint': f'https://service{counter}.example.com',
            'timeout': 30000 + counter * 1000,
            'retries': 3,
            'circuitBreaker': {
                'failureThreshold': 5,
                'recoveryTimeout': 60000,
                'monitoringPeriod': 10000,
            },
            'healthCheck': {'path': '/health', 'interval': 30000, 'timeout': 5000},
        }
        app['databases'][f'db{counter}'] = {
            'type': 'postgresql',
            'host': f'db{counter}.example.com',
            'port': 5432,
            'database': f'app_db_{counter}',
            'pool': {'min': 2, 'max': 20, 'idleTimeout': 30000},
            'ssl': {'enabled': True, 'rejectUnauthorized': False},
        }

    return _grow(config, add_service, target_size)


def generate_base64_data(target_size: int, rng: random.Random) -> str:
    """Random bytes as base64 inside a JSON envelope; compresses poorly."""
    raw = bytes(rng.getrandbits(8) for _ in range((target_size * 3) // 4 + 1))
    encoded = base64.b64encode(raw).decode('ascii')
    envelope = {'type': 'binary_data', 'encoding': 'base64', 'data': ''}
    room = target_size - len(_dumps(envelope))
    envelope['data'] = encoded[:max(room, 0)]
    return _fit(_dumps(envelope), target_size)


def generate_repetitive_data(target_size: int) -> str:
    """Near-identical log entries; compresses very well."""
    pattern = {'type': 'log_entries', 'entries': []}
    base_metadata = {
        'requestId': 'req-12345',
        'userId': 'user-67890',
        'operation': 'data_fetch',
    }

    def add_entry(doc, counter):
        doc['entries'].append({
            'timestamp': f'2024-01-01T10:{counter % 60:02d}:00Z',
            'level': 'INFO',
            'service': 'application-service',
            'message': 'Processing request with standard parameters and configuration',
            'metadata': dict(base_metadata, requestId=f'req-{12345 + counter}'),
        })

    return _grow(pattern, add_entry, target_size)


def generate_test_payloads(seed: int = FIXTURE_SEED) -> List[PayloadSizeTest]:
    """
    Build the fixture matrix used by every benchmark category.

    Args:
        seed: Seed for the pseudo-random fixture content

    Returns:
        Fixtures ordered from small to large, followed by the
        poorly-compressible and highly-compressible cases
    """
    rng = random.Random(seed)

    minimal = {'cmd': 'status', 'id': 123}
    message = {
        'type': 'message',
        'content': 'Hello, this is a test message for SDLP benchmarking purposes.',
        'timestamp': BASE_TIMESTAMP_MS,
    }
    snippet = {
        'config': {
            'api_endpoint': 'https://api.example.com/v1',
            'timeout': 30000,
            'retry_attempts': 3,
            'features': ['auth', 'compression', 'encryption'],
            'metadata': {'version': '1.0', 'build': '12345'},
        }
    }
    prompt = {
        'prompt': {
            'system': 'You are a helpful AI assistant specialized in software development.',
            'user': ('Please explain the concept of {{topic}} and provide a practical '
                     'example using {{language}}. Include best practices and common '
                     'pitfalls to avoid.'),
            'parameters': {
                'topic': 'dependency injection',
                'language': 'Python',
                'complexity': 'intermediate',
            },
            'metadata': {
                'version': '2.1',
                'category': 'software-development',
                'tags': ['tutorial', 'best-practices', 'examples'],
            },
        }
    }

    return [
        # Small payloads (< 1KB)
        PayloadSizeTest(32, 'Minimal command (32 bytes)', _fit(_dumps(minimal), 32)),
        PayloadSizeTest(128, 'Short message (128 bytes)', _fit(_dumps(message), 128)),
        PayloadSizeTest(256, 'Configuration snippet (256 bytes)', _fit(_dumps(snippet), 256)),

        # Medium payloads (1-5KB)
        PayloadSizeTest(1024, 'AI prompt template (1KB)', _fit(_dumps(prompt), 1024), 0.6),
        PayloadSizeTest(2048, 'API configuration (2KB)', generate_api_config(2048), 0.7),
        PayloadSizeTest(5120, 'Large JSON dataset (5KB)', generate_large_dataset(5120, rng), 0.5),

        # Large payloads (5-20KB)
        PayloadSizeTest(10240, 'Complex application state (10KB)',
                        generate_complex_state(10240, rng), 0.4),
        PayloadSizeTest(16384, 'Large configuration (16KB)', generate_large_config(16384), 0.45),

        PayloadSizeTest(1024, 'Base64 encoded data (1KB)', generate_base64_data(1024, rng), 0.9),
        PayloadSizeTest(2048, 'Repetitive data (2KB)', generate_repetitive_data(2048), 0.1),
    ]
