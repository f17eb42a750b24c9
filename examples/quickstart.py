"""skypass Quickstart — ground track and next passes for the ISS."""

from datetime import timedelta

from skypass import Observer, SatelliteOracle, SearchWindow, find_passes, ground_track, read_tle_text

# ISS (ZARYA) TLE
tle_text = """
ISS (ZARYA)
1 25544U 98067A   24045.54896019  .00016717  00000-0  30093-3 0  9993
2 25544  51.6412 207.4925 0004948 290.5508 178.9792 15.49583488439596
""".strip()

iss = read_tle_text(tle_text)
oracle = SatelliteOracle(iss)

print(f"Satellite: {iss.name}")
print(f"NORAD ID:  {iss.norad_id}")
print(f"Epoch:     {iss.epoch}")
print(f"Period:    {iss.period_minutes:.1f} min")

track = ground_track(oracle, iss.epoch, hours_forward=1.5)
print(f"Track:     {len(track)} points, starts at {track[0].latitude_deg:.2f}°, {track[0].longitude_deg:.2f}°")

# Ankara, for the 24 hours after epoch
site = Observer(latitude_deg=39.93, longitude_deg=32.86, altitude_m=938.0)
window = SearchWindow(iss.epoch, iss.epoch + timedelta(hours=24), timedelta(seconds=20))
result = find_passes(oracle, site, window, max_passes=5)

if result.no_passes:
    print("No passes in the next 24 hours.")
for i, p in enumerate(result, start=1):
    print(
        f"{i}. AOS {p.aos:%H:%M:%S}Z  TCA {p.tca:%H:%M:%S}Z  LOS {p.los:%H:%M:%S}Z"
        f"  max {p.max_elevation_deg:.1f}°  ({p.duration_minutes:.1f} min)"
    )
