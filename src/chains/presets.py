"""
Example chain descriptions
"""

CYCLE = """States: A, B, C
Initial distribution: A : 1.0
Rates: A -> B : 2.0, B -> C : 1.5, C -> A : 0.5"""

TWO_STATE = """States: A, B
Initial distribution: A : 1.0
Rates: A -> B : 1.0, B -> A : 1.0"""

# M/M/1 queue truncated at capacity 4, arrivals 1.0, service 1.5
BIRTH_DEATH = """States: Q0, Q1, Q2, Q3, Q4
Initial distribution: Q0 : 1.0
Rates:
  Q0 -> Q1 : 1.0, Q1 -> Q2 : 1.0, Q2 -> Q3 : 1.0, Q3 -> Q4 : 1.0,
  Q1 -> Q0 : 1.5, Q2 -> Q1 : 1.5, Q3 -> Q2 : 1.5, Q4 -> Q3 : 1.5"""

# 2-of-2 replicated service with a terminal failure state
ABSORBING = """States: Up, Degraded, Down
Initial distribution: Up : 1.0
Rates: Up -> Degraded : 0.2, Degraded -> Up : 1.0, Degraded -> Down : 0.1"""

WEATHER = """States: Sunny, Cloudy, Rainy
Initial distribution: uniform
Rates:
  Sunny -> Cloudy : 0.3, Sunny -> Rainy : 0.1,
  Cloudy -> Sunny : 0.4, Cloudy -> Rainy : 0.3,
  Rainy -> Cloudy : 0.5, Rainy -> Sunny : 0.2"""

# available example chains registry
EXAMPLE_CHAINS = {
    'cycle': CYCLE,
    'two-state': TWO_STATE,
    'birth-death': BIRTH_DEATH,
    'absorbing': ABSORBING,
    'weather': WEATHER,
}
