"""
Initialize database with default data
"""
from typing import List
from sqlalchemy.orm import Session
from hr_console.models.department import Department
from hr_console.models.skill import Skill

DEFAULT_DEPARTMENTS = [
    "Assembly",
    "Quality Control",
    "Maintenance",
    "Bonded",
    "Grinding",
    "HT",
    "Roller Grinding",
    "Store",
    "Turning",
]

BONDED_SKILLS = [
    "Knowledge of First In First Out",
    "Knowledge of Identification of Material Lot/Ladle",
    "Knowledge of Material System Docking/un-docking",
    "Knowledge of Bottle Handling",
    "Communication with Ladle System & Data Entry",
    "Knowledge of Verification of invoice with Supplier",
    "Knowledge of Preparation of Challan (OGC/FIFO)",
    "Knowledge of word Processing/Coordinating",
    "Knowledge of 5 S",
    "Knowledge of Inventory Management",
    "Wastage Management",
    "Knowledge of Internal Quality Standard",
    "Operate to OSHA/Pollution & with Safety Instructions",
    "Additional Skill Activity",
]

GRINDING_SKILLS = [
    "Knowledge of First In First Out",
    "Knowledge of Identification",
    "Knowledge of Segregation of Rejected",
    "Knowledge of Grinding MC",
    "Knowledge of Work Hardness",
    "Knowledge of Thickness of Work",
    "Knowledge of End Lead of Piece",
    "Knowledge of Hardess Index",
    "Knowledge of Safety",
    "Knowledge of Grinding Test",
    "Knowledge of FMEA",
    "Knowledge of PM",
    "Knowledge of Finish",
    "Knowledge of Post Process",
    "Knowledge of Part Id of Post Process Work",
    "Knowledge of Part Running Stock",
    "Knowledge of Process",
    "Knowledge of Heat Change",
    "Knowledge of Skill at Machine",
    "Knowledge of Coordinate of Grind MC",
    "Knowledge of Pre and Post Grind MC",
]

MAINTENANCE_SKILLS = [
    "Knowledge of Assembly/Disassembly Component",
    "Knowledge of Electrical Part List",
    "Knowledge of Mechanical",
    "Knowledge of Wind Preventive Maintenance",
    "Knowledge of Lifting Equipment",
    "Knowledge of Welding Equipment",
    "Knowledge of Material Handling",
    "Knowledge of General Safety",
    "Control Equipment",
    "Knowledge of Preventive Equipment",
    "Knowledge of Safety Equipment",
    "Knowledge of Equipment Operation",
    "Knowledge of Hydraulic Equipment",
    "Knowledge of Pneumatic Equipment",
    "Knowledge of Electrical Equipment",
    "Knowledge of Preventive/Basic Equipment",
    "Knowledge of Basic Equipment",
    "Knowledge of Operational Equipment",
    "Knowledge of Control Equipment",
    "Post Equipment Monitoring",
    "Knowledge of Emergency Equipment",
    "Knowledge of Fire Equipment",
    "Knowledge of Safety Audit Equipment",
    "Knowledge of Equipment Maintenance",
    "Knowledge of Diagnostic Equipment",
    "Knowledge of Calibration Equipment",
    "Knowledge of Troubleshooting",
    "Knowledge of Equipment Documentation",
    "Knowledge of Spare Parts Management",
    "Knowledge of Equipment Inspection",
    "Knowledge of Maintenance Planning",
]

# Machining floor list, used for every department without its own catalogue
GENERAL_SKILLS = [
    "Visual Inspection",
    "Computer Setting",
    "Dial Reading",
    "Seaming Make",
    "RC Check",
    "Roller Filing",
    "Master Matching",
    "Giver Track Size",
    "Lazer MC Operate",
    "Washing Oiling MC",
    "Searing Practice",
    "Child Complex Release",
    "Ball Searing BC",
    "Bore Gauge Setting",
    "Vernier Reading",
    "Large Die Equipment",
    "Rivet MC Setting",
    "Pneumatic Press MC",
    "Manual Operate",
]

DEPARTMENT_SKILLS = {
    "bonded": BONDED_SKILLS,
    "grinding": GRINDING_SKILLS,
    "maintenance": MAINTENANCE_SKILLS,
}


def default_skills_for(department_name: str) -> List[str]:
    """Starting catalogue of a department"""
    return DEPARTMENT_SKILLS.get(department_name.strip().lower(), GENERAL_SKILLS)


def init_default_data(db: Session):
    """Initialize database with default departments and skill catalogues"""

    existing = {name for (name,) in db.query(Department.name).all()}
    created = 0
    for name in DEFAULT_DEPARTMENTS:
        if name not in existing:
            db.add(Department(name=name, employee_count=0))
            created += 1
    db.flush()
    if created:
        print(f"✅ {created} departments created")

    seeded = 0
    for dept in db.query(Department).filter(Department.name.in_(DEFAULT_DEPARTMENTS)).all():
        if db.query(Skill.id).filter(Skill.department_id == dept.id).first():
            continue
        for order, skill_name in enumerate(default_skills_for(dept.name)):
            db.add(Skill(department_id=dept.id, name=skill_name, display_order=order))
        seeded += 1
    if seeded:
        print(f"✅ Skill catalogues created for {seeded} departments")

    db.commit()
