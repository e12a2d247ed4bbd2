"""Parse and render wikilinks in 3 lines — zero config, zero deps."""

from enlaces import parse, render

doc = parse("Start at [[Home]], then read [[the guide|./guide.md]].")
html = render(doc)
print(html)
