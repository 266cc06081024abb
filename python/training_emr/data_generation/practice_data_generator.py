"""
Training EMR - Practice Data Generator

Provides the fixed demonstration charts seeded on first run and a Faker-based
generator of synthetic adult primary-care charts for classroom practice.
No generated value refers to a real person.
"""

import random
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Any

from faker import Faker

from training_emr.utils.patient_records import new_patient
from training_emr.utils.helpers import generate_mrn, today_iso

def sample_patients() -> List[Dict[str, Any]]:
    """The three demonstration charts; each call returns fresh ids, MRNs and timestamps."""
    mrns: List[str] = []

    def chart(**fields: Any) -> Dict[str, Any]:
        record = new_patient(existing_mrns=mrns, **fields)
        mrns.append(record["mrn"])
        return record

    return [
        chart(
            firstName="Ariana",
            lastName="Lopez",
            dob="1992-07-16",
            sex="Female",
            phone="(555) 201-7789",
            lastVisit=today_iso(),
            allergies="Penicillin",
            medications="Sertraline 50mg qd",
            conditions="GAD",
            vitals={"hr": "74", "bp": "118/78", "temp": "98.6"},
            notes="Follow-up in 6 weeks; CBT referral.",
        ),
        chart(
            firstName="Marcus",
            lastName="Nguyen",
            dob="1984-11-02",
            sex="Male",
            phone="(555) 554-1130",
            lastVisit="2025-07-22",
            allergies="Peanuts",
            medications="Metformin 500mg bid",
            conditions="T2DM",
            vitals={"hr": "86", "bp": "132/84", "temp": "98.8"},
            notes="A1C 7.2 → reinforce diet/exercise; consider uptitration.",
        ),
        chart(
            firstName="Sara",
            lastName="Bennett",
            dob="2001-03-29",
            sex="Female",
            phone="(555) 330-4040",
            lastVisit="2025-05-10",
            allergies="None",
            medications="Albuterol PRN",
            conditions="Mild intermittent asthma",
            vitals={"hr": "70", "bp": "110/70", "temp": "98.4"},
            notes="Seasonal triggers; spacer technique reviewed.",
        ),
    ]

class PracticeDataGenerator:
    """Generate synthetic outpatient charts for students to practice on."""

    def __init__(self, seed: Optional[int] = None):
        """Initialize generator; a seed makes the output reproducible."""
        self.random = random.Random(seed)
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)

        # condition -> (typical medications, note template)
        self.condition_profiles = {
            'Hypertension': (['Lisinopril 10mg qd', 'Amlodipine 5mg qd', 'HCTZ 25mg qd'],
                             'BP above goal; recheck in 4 weeks, home BP log.'),
            'T2DM': (['Metformin 500mg bid', 'Metformin 1000mg bid', 'Empagliflozin 10mg qd'],
                     'A1C reviewed; diet and exercise counseling provided.'),
            'Mild intermittent asthma': (['Albuterol PRN'],
                                         'Inhaler technique reviewed; avoid known triggers.'),
            'GAD': (['Sertraline 50mg qd', 'Escitalopram 10mg qd'],
                    'Symptoms improving; continue therapy referral.'),
            'Hyperlipidemia': (['Atorvastatin 20mg qhs', 'Rosuvastatin 10mg qd'],
                               'Lipid panel due at next visit.'),
            'Hypothyroidism': (['Levothyroxine 75mcg qd'],
                               'TSH within range; continue current dose.'),
            'GERD': (['Omeprazole 20mg qd'],
                     'Reflux controlled; discussed late-meal avoidance.'),
            'Migraine': (['Sumatriptan 50mg PRN'],
                         'Headache diary started; reviewed red-flag symptoms.'),
        }

        self.allergy_options = [
            ('None', 0.45), ('Penicillin', 0.15), ('Sulfa drugs', 0.08), ('Peanuts', 0.07),
            ('Latex', 0.05), ('Shellfish', 0.06), ('Codeine', 0.05), ('Penicillin; Peanuts', 0.04),
            ('Aspirin', 0.05),
        ]

        self.sex_weights = [('Female', 0.49), ('Male', 0.49), ('Intersex', 0.01), ('Other', 0.01)]

    def _weighted(self, options: List[tuple]) -> str:
        values, weights = zip(*options)
        return self.random.choices(values, weights=weights, k=1)[0]

    def _phone(self) -> str:
        return f"(555) {self.random.randint(200, 999)}-{self.random.randint(1000, 9999)}"

    def _vitals(self, conditions: List[str]) -> Dict[str, str]:
        systolic = self.random.randint(104, 128)
        diastolic = self.random.randint(64, 82)
        if 'Hypertension' in conditions:
            systolic += self.random.randint(12, 28)
            diastolic += self.random.randint(6, 12)
        return {
            'hr': str(self.random.randint(58, 96)),
            'bp': f"{systolic}/{diastolic}",
            'temp': f"{self.random.uniform(97.6, 99.1):.1f}",
        }

    def generate_patient(self, existing_mrns: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """
        Generate one complete chart

        Args:
            existing_mrns: MRNs the new chart must not reuse

        Returns:
            Patient record dict
        """
        taken = set(existing_mrns or [])
        sex = self._weighted(self.sex_weights)
        if sex == 'Female':
            first_name = self.fake.first_name_female()
        elif sex == 'Male':
            first_name = self.fake.first_name_male()
        else:
            first_name = self.fake.first_name_nonbinary()

        condition_count = self.random.choices([0, 1, 2], weights=[0.25, 0.5, 0.25], k=1)[0]
        conditions = self.random.sample(sorted(self.condition_profiles), condition_count)
        medications = [self.random.choice(self.condition_profiles[c][0]) for c in conditions]
        notes = " ".join(self.condition_profiles[c][1] for c in conditions) or "Annual wellness visit; no acute concerns."

        dob = self.fake.date_of_birth(minimum_age=18, maximum_age=88)
        last_visit = date.today() - timedelta(days=self.random.randint(0, 540))

        return new_patient(
            existing_mrns=taken,
            mrn=generate_mrn(taken, rng=self.random),
            firstName=first_name,
            lastName=self.fake.last_name(),
            dob=dob.isoformat(),
            sex=sex,
            phone=self._phone(),
            lastVisit=last_visit.isoformat(),
            allergies=self._weighted(self.allergy_options),
            medications="; ".join(medications),
            conditions="; ".join(conditions),
            vitals=self._vitals(conditions),
            notes=notes,
        )

    def generate_patients(self, count: int, existing_mrns: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        """Generate ``count`` charts with MRNs unique among themselves and ``existing_mrns``."""
        taken = set(existing_mrns or [])
        patients = []
        for _ in range(count):
            patient = self.generate_patient(existing_mrns=taken)
            taken.add(patient['mrn'])
            patients.append(patient)
        return patients
