"""
Fixed demo records. Ids are stable so seeding twice overwrites rather than duplicates.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

FALLBACK_USER_ID = "00000000-0000-0000-0000-000000000001"

DEMO_CLIENT_ID = "10000000-0000-0000-0000-000000000001"
DEMO_TEMPLATE_ID = "20000000-0000-0000-0000-000000000001"
DEMO_TASK_ID = "30000000-0000-0000-0000-000000000001"
DEMO_AUDIT_ID = "40000000-0000-0000-0000-000000000001"
DEMO_CHECKLIST_ID = "50000000-0000-0000-0000-000000000001"

DUE_IN_DAYS = 30


def clients(user_id: str) -> List[Dict[str, Any]]:
    return [
        {
            "id": DEMO_CLIENT_ID,
            "name": "ABC Şirketi",
            "contact_person": "Ahmet Yılmaz",
            "email": "ahmet@abc.com",
            "phone": "+90 212 555 0001",
            "address": "İstanbul, Türkiye",
            "created_by": user_id,
        },
        {
            "id": "10000000-0000-0000-0000-000000000002",
            "name": "XYZ Işletmesi",
            "contact_person": "Fatima Kaya",
            "email": "fatima@xyz.com",
            "phone": "+90 216 555 0002",
            "address": "Ankara, Türkiye",
            "created_by": user_id,
        },
    ]


def form_templates(user_id: str) -> List[Dict[str, Any]]:
    return [
        {
            "id": DEMO_TEMPLATE_ID,
            "name": "Mali Denetim Şablonu",
            "template_type": "financial_audit",
            "content": {
                "sections": [
                    {
                        "title": "Genel Bilgiler",
                        "fields": ["company_name", "audit_date", "auditor_name"],
                    },
                ],
            },
            "created_by": user_id,
        },
        {
            "id": "20000000-0000-0000-0000-000000000002",
            "name": "Uyum Denetimi Şablonu",
            "template_type": "compliance_audit",
            "content": {"sections": []},
            "created_by": user_id,
        },
        {
            "id": "20000000-0000-0000-0000-000000000003",
            "name": "Bilgi Sistemleri Şablonu",
            "template_type": "information_systems_audit",
            "content": {
                "sections": [
                    {
                        "title": "Sistem Yönetimi",
                        "fields": ["system_inventory", "access_controls", "backup_procedures"],
                    },
                    {
                        "title": "Güvenlik",
                        "fields": ["security_policies", "vulnerability_assessment", "incident_response"],
                    },
                ],
            },
            "created_by": user_id,
        },
    ]


def tasks(user_id: str) -> List[Dict[str, Any]]:
    due = datetime.now(timezone.utc) + timedelta(days=DUE_IN_DAYS)
    return [
        {
            "id": DEMO_TASK_ID,
            "title": "2024 Mali Denetimi",
            "description": "ABC Şirketi için yıllık mali denetim",
            "client_id": DEMO_CLIENT_ID,
            "status": "in_progress",
            "assigned_to": [user_id],
            "created_by": user_id,
            "due_date": due.isoformat(),
        },
    ]


def audits(user_id: str) -> List[Dict[str, Any]]:
    return [
        {
            "id": DEMO_AUDIT_ID,
            "client_id": DEMO_CLIENT_ID,
            "task_id": DEMO_TASK_ID,
            "form_template_id": DEMO_TEMPLATE_ID,
            "status": "in_progress",
            "form_data": {},
            "created_by": user_id,
        },
    ]


def checklists(user_id: str) -> List[Dict[str, Any]]:
    return [
        {
            "id": DEMO_CHECKLIST_ID,
            "client_id": DEMO_CLIENT_ID,
            "title": "ABC Şirketi Denetim Kontrol Listesi",
            "created_by": user_id,
        },
    ]


def checklist_items(user_id: str) -> List[Dict[str, Any]]:
    descriptions = [
        ("Mali tablolar gözden geçirildi", True),
        ("Kaynaklar doğrulandı", True),
        ("İç kontroller değerlendirildi", False),
        ("Rapor hazırlandı", False),
    ]
    return [
        {
            "id": f"51000000-0000-0000-0000-00000000000{index}",
            "checklist_id": DEMO_CHECKLIST_ID,
            "description": description,
            "is_checked": checked,
            "order_index": index,
        }
        for index, (description, checked) in enumerate(descriptions, start=1)
    ]


def folders(user_id: str) -> List[Dict[str, Any]]:
    names = [
        ("Toplantı Notları 2024", "meeting_notes"),
        ("Çalışma Kağıtları", "working_papers"),
        ("Sözleşmeler", "contracts"),
        ("Şirketten Gelen Kanıtlar", "evidence"),
    ]
    return [
        {
            "id": f"60000000-0000-0000-0000-00000000000{index}",
            "client_id": DEMO_CLIENT_ID,
            "name": name,
            "folder_type": folder_type,
            "created_by": user_id,
        }
        for index, (name, folder_type) in enumerate(names, start=1)
    ]


# Insertion order respects foreign keys
SEED_TABLES = [
    ("clients", clients),
    ("form_templates", form_templates),
    ("tasks", tasks),
    ("audits", audits),
    ("checklists", checklists),
    ("checklist_items", checklist_items),
    ("folders", folders),
]
