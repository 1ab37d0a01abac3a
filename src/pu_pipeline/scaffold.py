# src/pu_pipeline/scaffold.py
"""
Default application skeleton for repositories that ship no stack program.

``simple_deployment(namespace)`` returns a tree mutation that writes a
one-Deployment Kubernetes program into ``app_dir`` (``.pulumi/`` by default). Use it as a
``TransformSpec`` mutation, typically gated on "manifest not present".
"""

from __future__ import annotations

import json
from typing import Any, Dict

from pu_pipeline.types import ExecutionContext, Mutation

APP_DIR = ".pulumi"
MANIFEST_FILE = "Pulumi.yaml"

# container defaults for the generated Deployment
CPU_REQUEST = "100m"
MEMORY_REQUEST = "320Mi"
CONTAINER_PORT = 8080

TSCONFIG: Dict[str, Any] = {
    "compilerOptions": {
        "outDir": "bin",
        "target": "es6",
        "lib": ["es6"],
        "module": "commonjs",
        "moduleResolution": "node",
        "sourceMap": True,
        "experimentalDecorators": True,
        "pretty": True,
        "noFallthroughCasesInSwitch": True,
        "noImplicitAny": True,
        "noImplicitReturns": True,
        "forceConsistentCasingInFileNames": True,
        "strictNullChecks": True,
    },
    "files": ["index.ts"],
}

INDEX_TS = """import * as pulumi from "@pulumi/pulumi";
import * as k8s from "@pulumi/kubernetes";

const name = "{name}";

const deployment = new k8s.apps.v1.Deployment(name, {{
    metadata: {{
        name,
        namespace: "{namespace}"
    }},
    spec: {{
        selector: {{ matchLabels: {{ app: name }} }},
        replicas: 1,
        template: {{
            metadata: {{ labels: {{ app: name }} }},
            spec: {{
                containers: [
                    {{
                        name,
                        image: "{image}",
                        resources: {{ requests: {{ cpu: "{cpu}", memory: "{memory}" }} }},
                        ports: [{{ containerPort: {port}, name: "http" }}]
                    }}
                ]
            }}
        }}
    }}
}});
"""


def pulumi_yaml(name: str) -> str:
    return f"name: {name}\nruntime: nodejs\n"


def package_json(name: str) -> str:
    body = {
        "name": name,
        "devDependencies": {"@types/node": "latest"},
        "dependencies": {"@pulumi/pulumi": "latest", "@pulumi/kubernetes": "latest"},
    }
    return json.dumps(body, indent=4) + "\n"


def index_ts(name: str, namespace: str, image: str) -> str:
    return INDEX_TS.format(
        name=name, namespace=namespace, image=image,
        cpu=CPU_REQUEST, memory=MEMORY_REQUEST, port=CONTAINER_PORT,
    )


def simple_deployment(namespace: str, app_dir: str = APP_DIR, manifest_file: str = MANIFEST_FILE) -> Mutation:
    def add_simple_deployment(tree, ctx: ExecutionContext):
        if not ctx.image:
            raise ValueError("no container image available for the simple deployment")
        name = tree.name
        tree.add_file(f"{app_dir}/{manifest_file}", pulumi_yaml(name))
        tree.add_file(f"{app_dir}/package.json", package_json(name))
        tree.add_file(f"{app_dir}/tsconfig.json", json.dumps(TSCONFIG, indent=4) + "\n")
        tree.add_file(f"{app_dir}/index.ts", index_ts(name, namespace, ctx.image))
        return tree

    return add_simple_deployment
