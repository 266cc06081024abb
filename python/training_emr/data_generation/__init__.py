"""
Data Generation Module for Training EMR

Demonstration charts seeded on first run and synthetic practice charts.
"""

from .practice_data_generator import PracticeDataGenerator, sample_patients

__all__ = ['PracticeDataGenerator', 'sample_patients']
