"""
Shared fixtures: a small TOGAF vault covering phases B, C, D, F and the
principles catalogue, with gap analysis and lifecycle columns.
"""

import pytest

from archexport.ir.model import Document

FIXED_TIMESTAMP = "2026-01-01T00:00:00.000Z"

BUSINESS_DOC = """---
togaf_phase: B
artifact_type: deliverable
version: 0.1.0
status: draft
---
# Business Architecture

## Business Processes

| Process | Description |
|---------|-------------|
| User Onboarding | New user registration flow |
| Order Processing | End-to-end order lifecycle |
| Legacy Billing | Old billing system |

## Gap Analysis

| Baseline | Target | Gap | Action |
|----------|--------|-----|--------|
| Manual onboarding | Automated onboarding | No automation | Implement self-service portal |
| Legacy Billing | Modern Billing | Outdated billing system | Replace with cloud billing |
"""

APPLICATION_DOC = """---
togaf_phase: C
artifact_type: deliverable
version: 0.1.0
status: draft
---
# Application Architecture

## Application Portfolio

| Component | Purpose | Status |
|-----------|---------|--------|
| API Gateway | Route requests | Active |
| Legacy CRM | Customer management | Retire |
| AI Assistant | Intelligent support | New |
| User Portal | Self-service | Active |

## Data Flow

```mermaid
graph TD
  APIGateway["API Gateway"] --> UserPortal["User Portal"]
  APIGateway --> AIAssistant["AI Assistant"]
  UserPortal --> DB["Database"]
```
"""

TECHNOLOGY_DOC = """---
togaf_phase: D
artifact_type: deliverable
version: 0.1.0
status: draft
---
# Technology Architecture

| Component | Technology | Status |
|-----------|-----------|--------|
| Kubernetes Cluster | K8s | Active |
| On-Prem Server | Physical | Retire |
| Cloud CDN | CloudFront | Planned |
"""

ROADMAP_DOC = """---
togaf_phase: F
artifact_type: deliverable
version: 0.1.0
status: draft
---
# Architecture Roadmap

| Initiative | Timeline | Status |
|-----------|----------|--------|
| Phase 1: Foundation | Q1 2026 | In Progress |
| Phase 2: Migration | Q2 2026 | Planned |
"""

PRINCIPLES_DOC = """---
togaf_phase: Preliminary
artifact_type: catalog
version: 0.1.0
status: draft
---
# Architecture Principles

| ID | Principle | Rationale |
|----|-----------|-----------|
| P-01 | Cloud-First | Reduce on-prem costs |
"""


@pytest.fixture
def business_doc():
    return Document("B1_Business_Architecture.md", BUSINESS_DOC)


@pytest.fixture
def application_doc():
    return Document("C1_Application_Architecture.md", APPLICATION_DOC)


@pytest.fixture
def technology_doc():
    return Document("D1_Technology_Architecture.md", TECHNOLOGY_DOC)


@pytest.fixture
def roadmap_doc():
    return Document("F1_Architecture_Roadmap.md", ROADMAP_DOC)


@pytest.fixture
def principles_doc():
    return Document("P1_Architecture_Principles.md", PRINCIPLES_DOC)


@pytest.fixture
def vault(business_doc, application_doc, technology_doc, roadmap_doc, principles_doc):
    return [business_doc, application_doc, technology_doc, roadmap_doc, principles_doc]


@pytest.fixture
def fixed_timestamp():
    return FIXED_TIMESTAMP
