from __future__ import annotations

from django import forms


class ForecastForm(forms.Form):
    address = forms.CharField(
        required=False,
        strip=True,
        widget=forms.TextInput(attrs={"placeholder": "e.g. 1600 Amphitheatre Parkway, Mountain View, CA"}),
    )
