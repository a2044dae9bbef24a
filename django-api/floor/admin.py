from django.contrib import admin

from floor.models import Battle, Booking, DeviceClaim, Member, Salary, Session, Subscription


class MemberInline(admin.TabularInline):
    model = Member
    extra = 0
    can_delete = False
    readonly_fields = ["position", "name", "people_count", "devices", "added_at"]


class DeviceClaimInline(admin.TabularInline):
    model = DeviceClaim
    extra = 0


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    list_display = ["customer_name", "start_time", "duration_minutes", "people_count", "price", "paid_amount", "status"]
    list_filter = ["status"]
    search_fields = ["customer_name", "contact_number"]
    inlines = [MemberInline, DeviceClaimInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["customer_name", "booking_time", "people_count", "status"]
    list_filter = ["status"]
    search_fields = ["customer_name"]


@admin.register(Battle)
class BattleAdmin(admin.ModelAdmin):
    list_display = ["crown_holder", "challenger", "crown_holder_score", "challenger_score", "status"]
    list_filter = ["status"]


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ["type", "provider", "cost", "start_date", "expiry_date"]
    search_fields = ["type", "provider"]


@admin.register(Salary)
class SalaryAdmin(admin.ModelAdmin):
    list_display = ["employee_name", "amount", "payment_date"]
    list_filter = ["payment_date"]
    search_fields = ["employee_name"]
