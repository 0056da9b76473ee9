"""
Django admin registrations for the tracker models.

The admin site at ``/admin/`` lets an operator with a superuser account
browse and correct records directly.  Assignments show their remaining
days, computed on display like everywhere else.
"""

from django.contrib import admin

from .models import Assignment, Medication, Patient
from .services.treatment import remaining_days


class AssignmentInline(admin.TabularInline):
    model = Assignment
    extra = 0


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'date_of_birth')
    search_fields = ('name',)
    inlines = [AssignmentInline]


@admin.register(Medication)
class MedicationAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'dosage', 'frequency')
    search_fields = ('name',)


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'medication', 'start_date', 'number_of_days', 'days_left')
    list_filter = ('medication',)
    list_select_related = ('patient', 'medication')
    search_fields = ('patient__name', 'medication__name')

    @admin.display(description='Remaining days')
    def days_left(self, obj: Assignment) -> int:
        return remaining_days(obj.start_date, obj.number_of_days)
